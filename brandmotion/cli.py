"""
BrandMotion CLI - build and render brand videos from scene files.

Usage:
    brandmotion --help                          Show all commands
    brandmotion templates                       List starter templates
    brandmotion new -t brand-intro -o intro.yml Start a scene file from a template
    brandmotion timeline intro.yml              Show the scene schedule
    brandmotion preview intro.yml -o intro.html Write a looping HTML preview
    brandmotion render intro.yml -o intro.mp4   Render the video
    brandmotion serve                           Start the API server
"""

import asyncio
import shutil
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from brandmotion.config import get_config
from brandmotion.schemas.export import ExportRequest

app = typer.Typer(
    name="brandmotion",
    help="BrandMotion CLI - animated brand videos from scene files",
    no_args_is_help=True,
)


# --- Step printer helpers ---


def _print_step(step_num: int, total: int, message: str) -> None:
    """Print a step progress message."""
    typer.echo(f"\n[{step_num}/{total}] {message}...")


def _print_success(message: str) -> None:
    """Print a success message."""
    typer.echo(f"  ✅ {message}")


def _print_progress(label: str, progress: int) -> None:
    typer.echo(f"  {progress:>3}%  {label}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


def _load_request(path: Path) -> ExportRequest:
    if not path.is_file():
        _print_error(f"Scene file not found: {path}")
        raise typer.Exit(1)
    try:
        return ExportRequest.from_yaml(path)
    except (ValidationError, yaml.YAMLError) as e:
        _print_error(f"Invalid scene file {path}:\n{e}")
        raise typer.Exit(1) from e


@app.command()
def templates():
    """List the starter templates."""
    from brandmotion.video.templates import TEMPLATES

    for template in TEMPLATES:
        typer.echo(f"{template.id:<16} {template.name} ({len(template.scenes)} scenes)")
        typer.echo(f"{'':<16} {template.description}")


@app.command()
def new(
    template_id: str = typer.Option("brand-intro", "--template", "-t", help="Template id"),
    output: Path = typer.Option(Path("scenes.yml"), "--output", "-o", help="Scene file to write"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Start a scene file from a template and the configured brand."""
    from brandmotion.video.templates import get_template

    template = get_template(template_id)
    if template is None:
        _print_error(f"Unknown template: {template_id}")
        raise typer.Exit(1)
    if output.exists() and not force:
        _print_error(f"{output} already exists (use --force to overwrite)")
        raise typer.Exit(1)

    brand = get_config().brand
    request = ExportRequest.model_validate(
        {
            "brandPalette": {
                "primary": brand.primary,
                "secondary": brand.secondary,
                "accent": brand.accent,
                "headlineFont": brand.headline_font,
            },
            "aspectRatio": "16:9",
            "quality": get_config().render.default_quality,
            "scenes": [s.model_dump(by_alias=True, exclude_none=True) for s in template.to_scenes()],
        }
    )
    data = request.model_dump(by_alias=True, exclude_none=True)
    output.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))
    _print_success(f"Wrote {output} from '{template.name}'")


@app.command()
def timeline(
    scene_file: Path = typer.Argument(..., help="Scene file (YAML)"),
):
    """Print the scene schedule in milliseconds."""
    from brandmotion.video.timeline import compute_master_timeline

    request = _load_request(scene_file)
    master = compute_master_timeline(request.scenes or [])

    typer.echo(f"{'scene':<12} {'start':>7} {'end':>7} {'entry':>6} {'hold':>6} {'exit':>6}")
    for t in master.scene_timings:
        typer.echo(
            f"{t.scene_id:<12} {t.start_time:>7} {t.end_time:>7} "
            f"{t.phases.entry.duration:>6} {t.phases.hold.duration:>6} {t.phases.exit.duration:>6}"
        )
    typer.echo(f"\nTotal: {master.total_duration}ms")


@app.command()
def preview(
    scene_file: Path = typer.Argument(..., help="Scene file (YAML)"),
    output: Path = typer.Option(Path("preview.html"), "--output", "-o", help="HTML file to write"),
):
    """Write a looping HTML preview of a scene file."""
    from brandmotion.video.document import synthesize_document
    from brandmotion.video.presets import build_catalog
    from brandmotion.video.serializers import serialize_preview
    from brandmotion.video.timeline import compute_master_timeline

    config = get_config()
    request = _load_request(scene_file)
    scenes = request.scenes or []

    document = synthesize_document(
        compute_master_timeline(scenes),
        scenes,
        request.brand_palette,
        request.aspect_ratio,
        build_catalog(),
        headline_font=config.brand.headline_font,
    )
    output.write_text(serialize_preview(document, config.render.preview_loop_pause_ms))
    _print_success(f"Preview: {output} ({document.total_duration_ms / 1000:.1f}s)")


@app.command()
def render(
    scene_file: Path = typer.Argument(..., help="Scene file (YAML)"),
    output: Path = typer.Option(Path("video.mp4"), "--output", "-o", help="Video file to write"),
    quality: str | None = typer.Option(
        None,
        "--quality",
        "-q",
        help="Quality: low (24fps), medium (30fps) or high (60fps)",
    ),
):
    """Render a scene file to an MP4."""
    from brandmotion.core.exceptions import ExportRejected
    from brandmotion.core.logging import setup_logging
    from brandmotion.jobs.store import InMemoryJobStore
    from brandmotion.video.orchestrator import build_orchestrator
    from brandmotion.video.presets import build_catalog
    from brandmotion.video.session import ExportSession, ExportState

    setup_logging()
    config = get_config()
    request = _load_request(scene_file)
    if quality:
        request = request.model_copy(update={"quality": quality})

    async def run() -> ExportSession:
        orchestrator = build_orchestrator(config, build_catalog(), InMemoryJobStore())
        session = ExportSession(orchestrator)

        _print_step(1, 2, "Rendering")
        await session.start(request)
        last = (None, -1)
        while session.is_exporting:
            await asyncio.sleep(0.5)
            await session.poll()
            if (session.message, session.progress) != last:
                last = (session.message, session.progress)
                _print_progress(session.message, session.progress)
        await orchestrator.join()
        return session

    try:
        session = asyncio.run(run())
    except ExportRejected as e:
        _print_error(e.message)
        raise typer.Exit(1) from e

    if session.state != ExportState.SUCCESS:
        _print_error(f"Export failed: {session.error}")
        raise typer.Exit(1)

    _print_step(2, 2, "Saving")
    job_output = Path(config.settings.output_dir) / "videos" / Path(session.output_url or "").name
    output.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(job_output), output)
    _print_success(f"Video: {output}")


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable hot reload"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
):
    """Start the API server."""
    import subprocess

    cmd = ["uvicorn", "brandmotion.main:app", "--host", "0.0.0.0", "--port", str(port)]
    if reload:
        cmd.append("--reload")

    subprocess.run(cmd, check=False)


if __name__ == "__main__":
    app()
