from typing import Annotated

from fastapi import Depends, Request

from brandmotion.config import AppConfig, get_config
from brandmotion.jobs.store import JobStore
from brandmotion.video.orchestrator import ExportOrchestrator
from brandmotion.video.presets import PresetCatalog


def get_catalog(request: Request) -> PresetCatalog:
    """Preset catalog built at startup."""
    catalog: PresetCatalog = request.app.state.catalog
    return catalog


def get_job_store(request: Request) -> JobStore:
    store: JobStore = request.app.state.job_store
    return store


def get_orchestrator(request: Request) -> ExportOrchestrator:
    orchestrator: ExportOrchestrator = request.app.state.orchestrator
    return orchestrator


# Type aliases for dependency injection
Config = Annotated[AppConfig, Depends(get_config)]
Catalog = Annotated[PresetCatalog, Depends(get_catalog)]
Jobs = Annotated[JobStore, Depends(get_job_store)]
Orchestrator = Annotated[ExportOrchestrator, Depends(get_orchestrator)]
