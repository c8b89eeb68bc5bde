"""Output formatters for optimization results."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from macrochef.optimizer.benchmark import BenchmarkSummary
from macrochef.optimizer.models import OptimizationResult
from macrochef.optimizer.serialization import serialize_result

OUTPUT_FORMATS = ("table", "json", "markdown")

_QUALITY_COLORS = {"good": "green", "fair": "yellow", "poor": "red"}


def _objective_str(result: OptimizationResult) -> str:
    return f"{result.objective_value:.1f}" if result.feasible else "inf"


class TableFormatter:
    """Format results as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, result: OptimizationResult) -> None:
        """Print formatted tables to console.

        Args:
            result: Optimization result to format
        """
        # Header panel
        status_color = "green" if result.feasible else "red"
        status = "FEASIBLE" if result.feasible else "INFEASIBLE"
        header_lines = [
            f"[bold]OPTIMIZATION RESULT[/bold] - {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            f"Strategy: {result.strategy.value} ({result.strategy.label})",
            f"Status: [{status_color}]{status}[/{status_color}]",
        ]
        if result.targets is not None:
            header_lines.append(f"Meal: {result.targets.meal_type.value}")

        self.console.print(Panel("\n".join(header_lines), title="Recipe"))

        if not result.feasible:
            self.console.print(f"[red]Error: {result.message}[/red]")
            return

        # Ingredient table
        ingredient_table = Table(title="Ingredients")
        ingredient_table.add_column("Ingredient", style="cyan", max_width=40)
        ingredient_table.add_column("Category")
        ingredient_table.add_column("Grams", justify="right")

        total_grams = 0.0
        for entry in result.ingredients:
            ingredient_table.add_row(
                entry.ingredient.name,
                entry.category.value,
                f"{entry.quantity:.1f}",
            )
            total_grams += entry.quantity

        ingredient_table.add_row(
            "[bold]TOTAL[/bold]",
            "",
            f"[bold]{total_grams:.1f}[/bold]",
            style="bold",
        )

        self.console.print(ingredient_table)

        # Macro summary table
        macro_table = Table(title="Macro Summary")
        macro_table.add_column("Macro")
        macro_table.add_column("Achieved", justify="right")
        macro_table.add_column("Target", justify="right")
        macro_table.add_column("Match", justify="center")

        quality = result.match_quality
        for name in ("protein", "carbs", "fats"):
            achieved = getattr(result.macros, name)
            if result.targets is not None:
                target_str = f"{getattr(result.targets, name):.1f} g"
                grade = quality[name]
                color = _QUALITY_COLORS[grade]
                match_str = f"[{color}]{grade}[/{color}]"
            else:
                target_str, match_str = "-", "-"
            macro_table.add_row(name.capitalize(), f"{achieved:.1f} g", target_str, match_str)

        macro_table.add_row("Calories", f"{result.macros.calories:.0f} kcal", "-", "-")

        self.console.print(macro_table)

        self.console.print(
            f"[dim]Objective: {_objective_str(result)} | "
            f"Time: {result.solve_time_ms:.2f} ms[/dim]"
        )

    def format_comparison(self, results: Sequence[OptimizationResult]) -> None:
        """Print several strategies' results side by side."""
        table = Table(title="Strategy Comparison")
        table.add_column("Strategy", style="cyan")
        table.add_column("Feasible", justify="center")
        table.add_column("Protein", justify="right")
        table.add_column("Carbs", justify="right")
        table.add_column("Fats", justify="right")
        table.add_column("Calories", justify="right")
        table.add_column("Objective", justify="right")
        table.add_column("Time (ms)", justify="right")

        for result in results:
            table.add_row(
                f"{result.strategy.value} ({result.strategy.label})",
                "[green]yes[/green]" if result.feasible else "[red]no[/red]",
                f"{result.macros.protein:.1f}",
                f"{result.macros.carbs:.1f}",
                f"{result.macros.fats:.1f}",
                f"{result.macros.calories:.0f}",
                _objective_str(result),
                f"{result.solve_time_ms:.2f}",
            )

        self.console.print(table)

    def format_benchmark(self, summaries: Sequence[BenchmarkSummary]) -> None:
        """Print benchmark statistics per strategy."""
        table = Table(title="Strategy Benchmark")
        table.add_column("Strategy", style="cyan")
        table.add_column("Trials", justify="right")
        table.add_column("Mean time (ms)", justify="right")
        table.add_column("Feasible", justify="right")
        table.add_column("Mean objective", justify="right")
        table.add_column("Best", justify="right")
        table.add_column("Worst", justify="right")
        table.add_column("Within 10%", justify="right")

        def fmt(value: Optional[float]) -> str:
            return f"{value:.1f}" if value is not None else "-"

        for s in summaries:
            table.add_row(
                f"{s.strategy.value} ({s.strategy.label})",
                str(s.trials),
                f"{s.mean_solve_time_ms:.2f} ± {s.std_solve_time_ms:.2f}",
                f"{s.feasible_rate:.0%}",
                fmt(s.mean_objective),
                fmt(s.min_objective),
                fmt(s.max_objective),
                f"{s.within_tolerance_rate:.0%}",
            )

        self.console.print(table)


class JSONFormatter:
    """Format results as JSON for programmatic use."""

    def format(self, result: OptimizationResult) -> str:
        """Return JSON string in the CLI response envelope.

        Args:
            result: Optimization result to format

        Returns:
            JSON string with success, command, data and human_summary
        """
        response = {
            "success": result.feasible,
            "command": "solve",
            "data": {"result": serialize_result(result)},
        }
        if result.feasible:
            response["human_summary"] = (
                f"{result.strategy.label}: {len(result.ingredients)} ingredients, "
                f"deviation {result.objective_value:.1f}g"
            )
        else:
            response["errors"] = [result.message]
            response["human_summary"] = f"{result.strategy.label}: infeasible"
        return json.dumps(response, indent=2)


class MarkdownFormatter:
    """Format results as Markdown for sharing or documentation."""

    def format(self, result: OptimizationResult) -> str:
        """Return Markdown string.

        Args:
            result: Optimization result to format

        Returns:
            Markdown string
        """
        lines = [
            "# Macro-Matched Recipe",
            "",
            f"**Strategy:** {result.strategy.value} ({result.strategy.label})",
        ]

        if not result.feasible:
            lines.extend(["", f"**Infeasible:** {result.message}"])
            return "\n".join(lines)

        lines.append(f"**Calories:** {result.macros.calories:.0f} kcal")
        lines.append(f"**Objective:** {result.objective_value:.1f}")

        lines.extend(
            ["", "## Ingredients", "", "| Ingredient | Category | Amount |", "|------|------|------|"]
        )
        for entry in result.ingredients:
            lines.append(
                f"| {entry.ingredient.name} | {entry.category.value} | {entry.quantity:.0f}g |"
            )

        lines.extend(
            [
                "",
                "## Macro Summary",
                "",
                "| Macro | Amount | Target |",
                "|----------|--------|--------|",
            ]
        )
        for name in ("protein", "carbs", "fats"):
            achieved = getattr(result.macros, name)
            target = (
                f"{getattr(result.targets, name):.0f}g" if result.targets is not None else ""
            )
            lines.append(f"| {name.capitalize()} | {achieved:.1f}g | {target} |")

        return "\n".join(lines)


def format_result(
    result: OptimizationResult,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format optimization result in the specified format.

    Args:
        result: Optimization result to format
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        formatter = TableFormatter(console)
        formatter.format(result)
        return None
    elif output_format == "json":
        return JSONFormatter().format(result)
    elif output_format == "markdown":
        return MarkdownFormatter().format(result)
    else:
        raise ValueError(
            f"Unknown output format: {output_format} (choose from: {', '.join(OUTPUT_FORMATS)})"
        )
