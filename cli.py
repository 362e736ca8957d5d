from __future__ import annotations

import logging
import re
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional
import tomllib

import typer

from checklist.errors import ChecklistError
from checklist.pipeline import ChecklistTables, build_checklist
from dwc.archive import build_manifest, create_archive
from dwc.mapper import DatasetMetadata
from io_utils.logs import setup_logging
from io_utils.spreadsheets import read_sources
from io_utils.write import write_checklist, write_manifest
from qc.gbif import GbifRankLookup, no_rank

SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")


def load_config(config_path: Optional[Path]) -> Dict[str, Any]:
    cfg_path = resources.files("config").joinpath("config.default.toml")
    with cfg_path.open("rb") as f:
        config = tomllib.load(f)
    if config_path:
        with config_path.open("rb") as f:
            user_cfg = tomllib.load(f)
        _deep_update(config, user_cfg)
    return config


def _deep_update(d: Dict[str, Any], u: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict) and isinstance(d.get(k), dict):
            _deep_update(d[k], v)
        else:
            d[k] = v
    return d


def build_cli(
    input_dir: Path,
    output: Path,
    config: Optional[Path] = None,
    use_gbif: bool = True,
) -> ChecklistTables:
    """Core build logic used by the command line interface.

    Output files are only written once every table has been built, so a
    fatal error leaves ``output`` without partial Darwin Core files.
    """
    setup_logging(output)
    cfg = load_config(config)
    dataset_cfg = cfg.get("dataset", {})

    raw = read_sources(input_dir, cfg.get("sources", {}))
    rank_lookup = GbifRankLookup.from_config(cfg) if use_gbif else no_rank
    tables = build_checklist(
        raw,
        rank_lookup=rank_lookup,
        shortname=dataset_cfg.get("shortname", "alien-molluscs-checklist"),
        pro_parte_names=cfg.get("taxa", {}).get("pro_parte_synonyms", []),
    )

    written = write_checklist(output, tables, DatasetMetadata.from_config(cfg))
    create_archive(output)
    write_manifest(output, build_manifest(tables.row_counts(), tables.report.counts()))
    logging.info("Wrote %d files to %s", len(written), output)
    return tables


app = typer.Typer(help="Alien molluscs checklist to Darwin Core Archive")


@app.command()
def build(
    input: Path = typer.Option(
        ...,
        "--input",
        "-i",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory containing the checklist spreadsheets",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        file_okay=False,
        dir_okay=True,
        help="Output directory",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Optional config file",
    ),
    no_gbif: bool = typer.Option(
        False,
        "--no-gbif",
        help="Skip the GBIF name parser (taxonRank is left empty)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with an error when anomalies are reported",
    ),
) -> None:
    """Map the checklist spreadsheets to a Taxon core and its extensions."""
    try:
        tables = build_cli(input, output, config, use_gbif=not no_gbif)
    except ChecklistError as e:
        typer.echo(f"❌ Build failed: {e}", err=True)
        raise typer.Exit(1)
    except FileNotFoundError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ Darwin Core files written to: {output}")
    for name, count in tables.row_counts().items():
        typer.echo(f"   {name}: {count} rows")
    if tables.report:
        typer.echo(f"⚠️  {len(tables.report)} anomalies, see {output / 'anomalies.csv'}", err=True)
        if strict:
            raise typer.Exit(1)


@app.command()
def export(
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory containing DwC CSV files to export",
    ),
    version: str = typer.Option(
        "1.0.0",
        "--version",
        "-v",
        help="Semantic version for the export bundle",
    ),
    include_checksums: bool = typer.Option(
        True,
        "--checksums/--no-checksums",
        help="Include file checksums in manifest",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Optional config file for export settings",
    ),
) -> None:
    """Create a versioned Darwin Core Archive export bundle."""
    if not SEMVER_RE.match(version):
        typer.echo(
            f"Error: Version '{version}' must follow semantic versioning (e.g., '1.0.0')",
            err=True,
        )
        raise typer.Exit(1)

    cfg = load_config(config)
    additional_files = cfg.get("export", {}).get("additional_files", [])

    try:
        archive_path = create_archive(
            output,
            compress=True,
            version=version,
            include_checksums=include_checksums,
            additional_files=additional_files,
        )
    except (OSError, ValueError) as e:
        typer.echo(f"❌ Export failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ Export bundle created: {archive_path}")
    typer.echo(f"🏷️  Version: {version}")
    if include_checksums:
        typer.echo("🔐 Checksums: included")


if __name__ == "__main__":
    app()
