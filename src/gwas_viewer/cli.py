"""gwas-viewer: explore GWAS summary statistics from the command line."""

import json
import logging
import tomllib
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .analysis.filters import FilterSpec
from .analysis.plot_data import genomic_inflation, manhattan_series, qq_points
from .config import ConfigValidationError, build_config, load_config
from .gwas.loader import LoadConfig, load_dataset
from .gwas.models import GwasDataset, StudyMetadata
from .session import SessionState, chromosome_choices, derive_input_bounds
from .utils.validators import ValidationError


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(
    name="gwas-viewer", help="Filter, summarize and plot GWAS summary statistics"
)
console = Console()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("gwas_viewer").setLevel(level)


FilepathArg = Annotated[
    Path | None, typer.Argument(help="Summary statistics file (overrides config filepath)")
]
ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="TOML configuration file")
]
DelimiterOption = Annotated[
    str | None, typer.Option("--delimiter", "-d", help="Field delimiter (e.g. '\\t', ',')")
]
TraitOption = Annotated[str | None, typer.Option("--trait", help="Trait label for display")]
MapOption = Annotated[
    list[str] | None,
    typer.Option("--map", "-m", help="Column mapping SOURCE=CANONICAL (repeatable)"),
]
SnpOption = Annotated[str | None, typer.Option("--snp", help="SNP id pattern")]
A1Option = Annotated[str | None, typer.Option("--a1", help="Effect allele pattern")]
A2Option = Annotated[str | None, typer.Option("--a2", help="Other allele pattern")]
ChrOption = Annotated[
    list[str] | None, typer.Option("--chr", help="Chromosome to include (repeatable)")
]
ThresholdOption = Annotated[
    float | None, typer.Option("--threshold", "-t", help="Significance threshold, -log10(p)")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging")]
QuietOption = Annotated[bool, typer.Option("--quiet", "-q", help="Suppress non-error output")]


def _parse_mappings(mappings: list[str] | None) -> dict[str, str]:
    col_map = {}
    for item in mappings or []:
        source, sep, canonical = item.partition("=")
        if not sep or not source.strip() or not canonical.strip():
            raise ValidationError(f"Invalid column mapping '{item}', expected SOURCE=CANONICAL")
        col_map[source.strip()] = canonical.strip().upper()
    return col_map


def _resolve_config(
    filepath: Path | None,
    config_path: Path | None,
    delimiter: str | None,
    trait: str | None,
    mappings: list[str] | None,
) -> LoadConfig:
    """Merge CLI arguments over the optional TOML configuration."""
    overrides: dict = {}
    if filepath is not None:
        overrides["filepath"] = str(filepath.resolve())
    if delimiter is not None:
        overrides["delimiter"] = delimiter
    if trait is not None:
        overrides["trait_name"] = trait

    if config_path is not None:
        config = load_config(config_path, overrides)
    else:
        config = build_config(overrides)

    extra_map = _parse_mappings(mappings)
    if extra_map:
        config.col_map = {**config.col_map, **extra_map}

    return config


def _load_or_exit(
    filepath: Path | None,
    config_path: Path | None,
    delimiter: str | None,
    trait: str | None,
    mappings: list[str] | None,
) -> tuple[LoadConfig, GwasDataset]:
    try:
        config = _resolve_config(filepath, config_path, delimiter, trait, mappings)
    except (ConfigValidationError, ValidationError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Error: Invalid TOML in {config_path}: {e}[/red]")
        raise typer.Exit(1) from None

    result = load_dataset(config)
    if not result.ok:
        console.print(f"[red]Error: {result.message}[/red]")
        raise typer.Exit(1)

    return config, result.dataset


def _range(low: float | None, high: float | None) -> tuple[float | None, float | None] | None:
    if low is None and high is None:
        return None
    return (low, high)


def _build_spec(
    threshold: float,
    snp: str | None,
    a1: str | None,
    a2: str | None,
    chromosomes: list[str] | None,
    freq_min: float | None,
    freq_max: float | None,
    bp_min: float | None,
    bp_max: float | None,
    beta_min: float | None,
    beta_max: float | None,
    se_min: float | None,
    se_max: float | None,
) -> FilterSpec:
    try:
        return FilterSpec.build(
            snp_id=snp,
            allele_1=a1,
            allele_2=a2,
            effect_allele_freq=_range(freq_min, freq_max),
            position=_range(bp_min, bp_max),
            effect_size=_range(beta_min, beta_max),
            standard_error=_range(se_min, se_max),
            chromosomes=chromosomes or None,
            significance_threshold=threshold,
        )
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


def _format_float(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:.4g}"


@app.command()
def summary(
    filepath: FilepathArg = None,
    config_path: ConfigOption = None,
    delimiter: DelimiterOption = None,
    trait: TraitOption = None,
    mappings: MapOption = None,
    snp: SnpOption = None,
    a1: A1Option = None,
    a2: A2Option = None,
    chromosomes: ChrOption = None,
    freq_min: Annotated[float | None, typer.Option("--freq-min")] = None,
    freq_max: Annotated[float | None, typer.Option("--freq-max")] = None,
    bp_min: Annotated[float | None, typer.Option("--bp-min")] = None,
    bp_max: Annotated[float | None, typer.Option("--bp-max")] = None,
    beta_min: Annotated[float | None, typer.Option("--beta-min")] = None,
    beta_max: Annotated[float | None, typer.Option("--beta-max")] = None,
    se_min: Annotated[float | None, typer.Option("--se-min")] = None,
    se_max: Annotated[float | None, typer.Option("--se-max")] = None,
    threshold: ThresholdOption = None,
    top: Annotated[int | None, typer.Option("--top", "-k", help="Number of top hits")] = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Summarize a summary statistics file after applying filters."""
    setup_logging(verbose, quiet)

    if top is not None and top <= 0:
        console.print(f"[red]Error: --top must be positive, got {top}[/red]")
        raise typer.Exit(1)

    config, dataset = _load_or_exit(filepath, config_path, delimiter, trait, mappings)
    spec = _build_spec(
        config.significance_threshold if threshold is None else threshold,
        snp, a1, a2, chromosomes,
        freq_min, freq_max, bp_min, bp_max, beta_min, beta_max, se_min, se_max,
    )

    state = SessionState.start(dataset, spec)
    k = config.top_k if top is None else top
    result = state.summary(k)

    console.print(f"\n[bold]{dataset.trait_label or dataset.source_path.name}[/bold]")
    metadata = StudyMetadata.from_dict(dataset.study_metadata)
    for label, value in metadata.display_fields():
        console.print(f"  {label}: {value}")
    if metadata.reference_url:
        console.print(f"  Reference: {metadata.reference_url}")

    console.print(f"Variants: {result.total_count:,} of {len(dataset):,}")
    console.print(
        f"Significant (p < 1e-{result.threshold:g}): {result.significant_count:,}"
    )
    lambda_gc = genomic_inflation([p.record for p in state.view])
    console.print(f"Genomic inflation (lambda GC): {_format_float(lambda_gc)}")

    if not result.top_hits:
        console.print("[yellow]No variants match the current filters[/yellow]")
        return

    table = Table(title=f"Top {len(result.top_hits)} variants")
    for column in ("SNP", "CHR", "BP", "A1", "A2", "FREQ_A1", "EFFECT_A1", "SE", "P"):
        table.add_column(column)
    for record in result.top_hits:
        table.add_row(
            record.snp_id,
            record.chr_original,
            f"{record.position:.0f}",
            record.allele_1,
            record.allele_2,
            _format_float(record.effect_allele_freq),
            _format_float(record.effect_size),
            _format_float(record.standard_error),
            f"{record.p_value:.3g}",
        )
    console.print(table)


@app.command()
def bounds(
    filepath: FilepathArg = None,
    config_path: ConfigOption = None,
    delimiter: DelimiterOption = None,
    trait: TraitOption = None,
    mappings: MapOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Show the value ranges available for each filter."""
    setup_logging(verbose, quiet)

    _, dataset = _load_or_exit(filepath, config_path, delimiter, trait, mappings)

    table = Table(title="Filter ranges")
    table.add_column("Field")
    table.add_column("Min")
    table.add_column("Max")
    for name, entry in derive_input_bounds(dataset).items():
        table.add_row(name, _format_float(entry.minimum), _format_float(entry.maximum))
    console.print(table)

    labels = ", ".join(label for _, label in chromosome_choices(dataset))
    console.print(f"Chromosomes: {labels}")
    console.print(f"Representative SNP: {dataset.representative_snp_id}")


@app.command()
def export(
    filepath: FilepathArg = None,
    output: Annotated[
        Path, typer.Option("--output", "-o", help="JSON file to write")
    ] = Path("gwas_plot_data.json"),
    config_path: ConfigOption = None,
    delimiter: DelimiterOption = None,
    trait: TraitOption = None,
    mappings: MapOption = None,
    snp: SnpOption = None,
    a1: A1Option = None,
    a2: A2Option = None,
    chromosomes: ChrOption = None,
    freq_min: Annotated[float | None, typer.Option("--freq-min")] = None,
    freq_max: Annotated[float | None, typer.Option("--freq-max")] = None,
    bp_min: Annotated[float | None, typer.Option("--bp-min")] = None,
    bp_max: Annotated[float | None, typer.Option("--bp-max")] = None,
    beta_min: Annotated[float | None, typer.Option("--beta-min")] = None,
    beta_max: Annotated[float | None, typer.Option("--beta-max")] = None,
    se_min: Annotated[float | None, typer.Option("--se-min")] = None,
    se_max: Annotated[float | None, typer.Option("--se-max")] = None,
    threshold: ThresholdOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Write Manhattan and QQ plot data for the filtered variants as JSON."""
    setup_logging(verbose, quiet)

    config, dataset = _load_or_exit(filepath, config_path, delimiter, trait, mappings)
    spec = _build_spec(
        config.significance_threshold if threshold is None else threshold,
        snp, a1, a2, chromosomes,
        freq_min, freq_max, bp_min, bp_max, beta_min, beta_max, se_min, se_max,
    )

    state = SessionState.start(dataset, spec)
    result = state.summary(config.top_k)
    records = [p.record for p in state.view]

    payload = {
        "trait": dataset.trait_label,
        "threshold": spec.significance_threshold,
        "representative_snp": dataset.representative_snp_id,
        "axis": [
            {"chr": e.chr_numeric, "label": e.chr_original, "center": e.center}
            for e in dataset.axis
        ],
        "manhattan": manhattan_series(state.view),
        "qq": {
            "points": [list(pair) for pair in qq_points(records)],
            "lambda_gc": genomic_inflation(records),
        },
        "summary": {
            "total_count": result.total_count,
            "significant_count": result.significant_count,
            "top_hits": [r.snp_id for r in result.top_hits],
        },
    }

    try:
        with open(output, "w") as f:
            json.dump(payload, f, indent=2)
    except OSError as e:
        console.print(f"[red]Error: Could not write {output}: {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✓[/green] Wrote {len(state.view):,} variants to {output}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
