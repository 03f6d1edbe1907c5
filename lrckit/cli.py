from __future__ import annotations

import logging
from pathlib import Path

import typer

from lrckit.config import GRAMMARS, AppConfig, load_config, save_config
from lrckit.errors import ConfigError, ExportError
from lrckit.logging_setup import setup_logging
from lrckit.lrc.companion import attach_companions
from lrckit.lrc.enhanced import parse_enhanced_lrc_with_stats
from lrckit.lrc.export import export
from lrckit.lrc.model import LyricDocument, RichLine
from lrckit.lrc.parse import LrcParseStats, parse_lrc_with_stats
from lrckit.sync.tracker import LineTracker

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.callback()
def _root(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")):
    setup_logging(debug)


def _config() -> AppConfig:
    try:
        return load_config()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _load(
    lrc_path: Path, enhanced: bool | None, duration: int | None
) -> tuple[LyricDocument, LrcParseStats]:
    cfg = _config()
    use_enhanced = enhanced if enhanced is not None else cfg.grammar == "enhanced"
    hint = duration if duration is not None else cfg.duration_hint_ms
    parser = parse_enhanced_lrc_with_stats if use_enhanced else parse_lrc_with_stats
    return parser(_read(lrc_path), hint, fallback_ms=cfg.fallback_span_ms)


@app.command()
def parse(
    lrc_path: Path,
    enhanced: bool | None = typer.Option(None, "--enhanced/--standard", help="Grammar (default from config)"),
    duration: int | None = typer.Option(None, "--duration", min=0, help="Track length in ms"),
):
    """Parse LRC and print stats."""
    doc, stats = _load(lrc_path, enhanced, duration)
    typer.echo(f"lines_total={stats.lines_total}")
    typer.echo(f"lines_with_timestamps={stats.lines_with_timestamps}")
    typer.echo(f"lines_ignored={stats.lines_ignored}")
    typer.echo(f"events_total={stats.events_total}")
    typer.echo(f"span_ms={doc.span_ms}")
    typer.echo(f"metadata={doc.metadata}")


@app.command("export")
def export_cmd(
    lrc_path: Path,
    fmt: str = typer.Option("srt", "--format", case_sensitive=False, help="lrc|srt|json"),
    enhanced: bool | None = typer.Option(None, "--enhanced/--standard", help="Grammar (default from config)"),
    duration: int | None = typer.Option(None, "--duration", min=0, help="Track length in ms"),
    translation: Path | None = typer.Option(None, "--translation", help="Translation LRC to pair by time"),
    roma: Path | None = typer.Option(None, "--roma", help="Romanization LRC to pair by time"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Export LRC to SRT/JSON/LRC (normalized)."""
    doc, _stats = _load(lrc_path, enhanced, duration)
    if translation or roma:
        doc = attach_companions(
            doc,
            translation=_read(translation) if translation else None,
            roma=_read(roma) if roma else None,
        )

    try:
        data = export(doc, fmt)
    except ExportError as e:
        raise typer.BadParameter(str(e), param_hint="--format") from e

    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def at(
    lrc_path: Path,
    position_ms: int = typer.Argument(..., min=0, help="Playback position in ms"),
    enhanced: bool | None = typer.Option(None, "--enhanced/--standard", help="Grammar (default from config)"),
    duration: int | None = typer.Option(None, "--duration", min=0, help="Track length in ms"),
):
    """Print the line active at a playback position."""
    doc, _stats = _load(lrc_path, enhanced, duration)
    idx = LineTracker.from_lines(doc.lines).active_index(position_ms)
    if idx < 0:
        typer.echo("-")
        return
    line = doc.lines[idx]
    typer.echo(f"{idx}: {line.text}")
    if isinstance(line, RichLine) and line.secondary:
        typer.echo(f"   ({line.secondary})")


@app.command()
def config(
    grammar: str | None = typer.Option(None, "--grammar", case_sensitive=False, help="standard|enhanced"),
    fallback_span: int | None = typer.Option(None, "--fallback-span", min=1, help="Trailing line span in ms"),
):
    """Show or update the stored configuration."""
    values: dict[str, object] = {}
    if grammar is not None:
        if grammar.lower() not in GRAMMARS:
            raise typer.BadParameter(f"must be one of: {', '.join(GRAMMARS)}", param_hint="--grammar")
        values["grammar"] = grammar.lower()
    if fallback_span is not None:
        values["fallback_span_ms"] = fallback_span
    if values:
        save_config(**values)

    cfg = _config()
    typer.echo(f"config_dir={cfg.config_dir}")
    typer.echo(f"grammar={cfg.grammar}")
    typer.echo(f"fallback_span_ms={cfg.fallback_span_ms}")
    typer.echo(f"duration_hint_ms={cfg.duration_hint_ms}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
