"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from macrochef.config import Settings, get_settings
from macrochef.optimizer.models import (
    Category,
    Ingredient,
    MacroChefError,
    MacroTargets,
    MealType,
    OptimizationResult,
)
from macrochef.optimizer.stochastic import StochasticConfig

app = typer.Typer(
    help="Macro-targeted recipe quantities with LP/MILP/Genetic/Greedy heuristics",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
catalog_app = typer.Typer(help="Browse the ingredient catalog")
config_app = typer.Typer(help="Manage configuration")

app.add_typer(catalog_app, name="catalog")
app.add_typer(config_app, name="config")

# Set by the --config callback option; None means ~/.macrochef/config.yaml
_config_path: Optional[Path] = None


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def _settings() -> Settings:
    if _config_path is not None:
        return Settings.load(_config_path)
    return get_settings()


def _stochastic_config(settings: Settings) -> StochasticConfig:
    return StochasticConfig(
        generations=settings.stochastic.generations,
        population_size=settings.stochastic.population_size,
        mutation_rate=settings.stochastic.mutation_rate,
    )


def _fail(command: str, error: Exception, json_output: bool) -> None:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [str(error)]})
    else:
        console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


def _build_pool(
    settings: Settings,
    catalog_path: Optional[Path],
    ingredient_ids: Optional[list[str]],
    equipment: Optional[list[str]],
    detections_file: Optional[Path],
) -> list[Ingredient]:
    """Assemble the ingredient pool handed to the solvers.

    Starts from the selected ids (or the whole catalog), adds accepted
    image detections, then applies the equipment filter.
    """
    from macrochef.data.catalog import filter_by_equipment, get_catalog, select_ingredients
    from macrochef.data.detection import load_detections, merge_detections

    catalog = get_catalog(catalog_path or settings.catalog.path)

    selected_ids = list(ingredient_ids) if ingredient_ids else []
    if detections_file is not None:
        detections = load_detections(detections_file)
        selected_ids = merge_detections(
            selected_ids, detections, settings.detection.confidence_threshold
        )

    pool = select_ingredients(catalog, selected_ids) if selected_ids else catalog
    if equipment:
        pool = filter_by_equipment(pool, equipment)
    return pool


def _output_format(json_output: bool, output: Optional[str], settings: Settings) -> str:
    """Pick the solve output format, rejecting unknown names."""
    from macrochef.export.formatters import OUTPUT_FORMATS

    if json_output:
        return "json"
    output_format = (output or settings.defaults.output_format).lower()
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format {output_format!r} (choose from: {', '.join(OUTPUT_FORMATS)})"
        )
    return output_format


def _record_run(
    path: Path,
    result: OptimizationResult,
    pool: list[Ingredient],
    equipment: Optional[list[str]],
) -> None:
    """Append one run record as a JSON line."""
    from macrochef.optimizer.serialization import run_record

    record = run_record(result, [i.id for i in pool], list(equipment or []))
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a") as f:
        f.write(json.dumps(record) + "\n")


def _targets(protein: float, carbs: float, fats: float, meal_type: str) -> MacroTargets:
    try:
        meal = MealType(meal_type.lower())
    except ValueError:
        raise typer.BadParameter(
            f"Unknown meal type {meal_type!r} (breakfast, lunch, dinner, snack)"
        )
    targets = MacroTargets(protein=protein, carbs=carbs, fats=fats, meal_type=meal)
    targets.validate()
    return targets


# ============================================================================
# Main Commands
# ============================================================================


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show solver debug logs"),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml (default ~/.macrochef/config.yaml)"
    ),
) -> None:
    """Configure logging and settings for all commands."""
    global _config_path
    _config_path = config

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def solve(
    protein: float = typer.Option(..., "--protein", help="Target protein (g)"),
    carbs: float = typer.Option(..., "--carbs", help="Target carbs (g)"),
    fats: float = typer.Option(..., "--fats", help="Target fats (g)"),
    meal_type: str = typer.Option("dinner", "--meal-type", help="breakfast, lunch, dinner, snack"),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s",
        help="continuous (lp), quantized (milp), stochastic (genetic), baseline (greedy)",
    ),
    ingredient: Optional[list[str]] = typer.Option(
        None, "--ingredient", "-i", help="Ingredient id to include. Repeatable (default: whole catalog)"
    ),
    equipment: Optional[list[str]] = typer.Option(
        None, "--equipment", "-e", help="Available equipment id. Repeatable"
    ),
    detections: Optional[Path] = typer.Option(
        None, "--detections", help="JSON file of image detections to add to the pool"
    ),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="YAML ingredient catalog"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for the stochastic strategy"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format: table, json, markdown"
    ),
    record: Optional[Path] = typer.Option(
        None, "--record", help="Append a JSON-lines run record to this file"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Recommend ingredient quantities for macro targets."""
    from macrochef.export.formatters import format_result
    from macrochef.optimizer.solver import solve as run_solver

    settings = _settings()

    try:
        output_format = _output_format(json_output, output, settings)
        targets = _targets(protein, carbs, fats, meal_type)
        pool = _build_pool(settings, catalog, ingredient, equipment, detections)
        result = run_solver(
            strategy or settings.optimization.default_strategy,
            targets,
            pool,
            seed=seed if seed is not None else settings.optimization.seed,
            portion_grams=settings.optimization.portion_size,
            stochastic_config=_stochastic_config(settings),
            fallback_to_continuous=settings.optimization.fallback_to_continuous,
        )
    except (MacroChefError, ValueError) as e:
        _fail("solve", e, json_output)
        return

    if record is not None:
        try:
            _record_run(record, result, pool, equipment)
        except OSError as e:
            _fail("solve", e, json_output)

    text = format_result(result, output_format, console=console)
    if text is not None:
        print(text)

    if not result.feasible:
        raise typer.Exit(1)


@app.command()
def compare(
    protein: float = typer.Option(..., "--protein", help="Target protein (g)"),
    carbs: float = typer.Option(..., "--carbs", help="Target carbs (g)"),
    fats: float = typer.Option(..., "--fats", help="Target fats (g)"),
    meal_type: str = typer.Option("dinner", "--meal-type", help="breakfast, lunch, dinner, snack"),
    strategy: Optional[list[str]] = typer.Option(
        None, "--strategy", "-s", help="Strategy to include. Repeatable (default: all)"
    ),
    ingredient: Optional[list[str]] = typer.Option(
        None, "--ingredient", "-i", help="Ingredient id to include. Repeatable"
    ),
    equipment: Optional[list[str]] = typer.Option(
        None, "--equipment", "-e", help="Available equipment id. Repeatable"
    ),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="YAML ingredient catalog"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for the stochastic strategy"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Run several strategies on the same targets and pool."""
    from macrochef.export.formatters import TableFormatter
    from macrochef.optimizer.serialization import serialize_result
    from macrochef.optimizer.solver import best_result, compare_strategies

    settings = _settings()

    try:
        targets = _targets(protein, carbs, fats, meal_type)
        pool = _build_pool(settings, catalog, ingredient, equipment, None)
        results = compare_strategies(
            targets,
            pool,
            strategies=strategy,
            seed=seed if seed is not None else settings.optimization.seed,
            portion_grams=settings.optimization.portion_size,
            stochastic_config=_stochastic_config(settings),
            fallback_to_continuous=settings.optimization.fallback_to_continuous,
        )
    except (MacroChefError, ValueError) as e:
        _fail("compare", e, json_output)
        return

    best = best_result(results)

    if json_output:
        output_json({
            "success": True,
            "command": "compare",
            "data": {
                "results": [serialize_result(r) for r in results],
                "best_strategy": best.strategy.value if best else None,
            },
        })
        return

    TableFormatter(console).format_comparison(results)
    if best is not None:
        console.print(f"Best: [green]{best.strategy.value}[/green] ({best.objective_value:.1f})")
    else:
        console.print("[red]No strategy found a feasible recipe[/red]")


@app.command()
def benchmark(
    protein: float = typer.Option(..., "--protein", help="Target protein (g)"),
    carbs: float = typer.Option(..., "--carbs", help="Target carbs (g)"),
    fats: float = typer.Option(..., "--fats", help="Target fats (g)"),
    trials: int = typer.Option(10, "--trials", "-n", help="Runs per strategy"),
    strategy: Optional[list[str]] = typer.Option(
        None, "--strategy", "-s", help="Strategy to include. Repeatable (default: all)"
    ),
    ingredient: Optional[list[str]] = typer.Option(
        None, "--ingredient", "-i", help="Ingredient id to include. Repeatable"
    ),
    equipment: Optional[list[str]] = typer.Option(
        None, "--equipment", "-e", help="Available equipment id. Repeatable"
    ),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="YAML ingredient catalog"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Base random seed"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Benchmark strategies over repeated trials."""
    from dataclasses import asdict

    from macrochef.export.formatters import TableFormatter
    from macrochef.optimizer.benchmark import run_benchmark

    settings = _settings()

    try:
        targets = _targets(protein, carbs, fats, "dinner")
        pool = _build_pool(settings, catalog, ingredient, equipment, None)
        summaries = run_benchmark(
            targets,
            pool,
            strategies=strategy,
            trials=trials,
            seed=seed,
            portion_grams=settings.optimization.portion_size,
            stochastic_config=_stochastic_config(settings),
            fallback_to_continuous=settings.optimization.fallback_to_continuous,
        )
    except (MacroChefError, ValueError) as e:
        _fail("benchmark", e, json_output)
        return

    if json_output:
        output_json({
            "success": True,
            "command": "benchmark",
            "data": {
                "summaries": [
                    {**asdict(s), "strategy": s.strategy.value} for s in summaries
                ],
            },
        })
        return

    TableFormatter(console).format_benchmark(summaries)


# ============================================================================
# Catalog Commands
# ============================================================================


@catalog_app.command("list")
def catalog_list(
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="protein, carbs, vegetables, fats, seasonings"
    ),
    equipment: Optional[list[str]] = typer.Option(
        None, "--equipment", "-e", help="Only ingredients preparable with this equipment. Repeatable"
    ),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="YAML ingredient catalog"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List catalog ingredients."""
    from macrochef.data.catalog import (
        filter_by_equipment,
        get_catalog,
        get_ingredients_by_category,
    )

    settings = _settings()

    try:
        ingredients = get_catalog(catalog or settings.catalog.path)
        if category:
            try:
                wanted = Category(category.lower())
            except ValueError:
                raise typer.BadParameter(f"Unknown category: {category}")
            ingredients = get_ingredients_by_category(ingredients, wanted)
        if equipment:
            ingredients = filter_by_equipment(ingredients, equipment)
    except MacroChefError as e:
        _fail("catalog list", e, json_output)
        return

    if json_output:
        output_json({
            "success": True,
            "command": "catalog list",
            "data": {
                "ingredients": [
                    {
                        "id": i.id,
                        "name": i.name,
                        "category": i.category.value,
                        "protein_per_100g": i.protein_per_100g,
                        "carbs_per_100g": i.carbs_per_100g,
                        "fats_per_100g": i.fats_per_100g,
                        "calories_per_100g": i.calories_per_100g,
                        "equipment_needed": sorted(i.equipment_needed),
                    }
                    for i in ingredients
                ],
            },
            "human_summary": f"{len(ingredients)} ingredients",
        })
        return

    if not ingredients:
        console.print("[yellow]No ingredients match[/yellow]")
        return

    table = Table(title="Ingredient Catalog (per 100g)")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Protein", justify="right")
    table.add_column("Carbs", justify="right")
    table.add_column("Fats", justify="right")
    table.add_column("kcal", justify="right")
    table.add_column("Equipment")

    for i in ingredients:
        table.add_row(
            i.id,
            i.name,
            i.category.value,
            f"{i.protein_per_100g:g}",
            f"{i.carbs_per_100g:g}",
            f"{i.fats_per_100g:g}",
            f"{i.calories_per_100g:g}",
            ", ".join(sorted(i.equipment_needed)) or "-",
        )

    console.print(table)


@catalog_app.command("equipment")
def catalog_equipment() -> None:
    """List known equipment ids."""
    from macrochef.data.catalog import EQUIPMENT_OPTIONS

    table = Table(title="Equipment")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    for equipment_id, name in EQUIPMENT_OPTIONS.items():
        table.add_row(equipment_id, name)
    console.print(table)


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the active configuration."""
    import yaml

    data = _settings().to_dict()
    if json_output:
        output_json({"success": True, "command": "config show", "data": data})
        return
    console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(
        None, "--path", help="Where to write config.yaml (default ~/.macrochef/config.yaml)"
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config.yaml with default settings."""
    target = path or _config_path
    if target is None:
        target = Path.home() / ".macrochef" / "config.yaml"

    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    Settings().save(target)
    console.print(f"[green]Wrote default settings to {target}[/green]")


if __name__ == "__main__":
    app()
