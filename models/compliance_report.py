"""Result model of the NEP 2020 compliance rubric."""

from pydantic import BaseModel, Field

# Rubric categories in report order.
COMPLIANCE_CATEGORIES = (
    "art_education_priority",
    "physical_education_balance",
    "multidisciplinary_integration",
    "value_based_learning",
    "flexible_assessment",
    "holistic_development",
)


class ComplianceReport(BaseModel):
    """Overall score, six category scores and advisory strings."""

    overall_score: int = Field(ge=0, le=100)
    categories: dict[str, int]
    recommendations: list[str] = []

    @classmethod
    def stub(cls, score: int, recommendations: list[str] | None = None) -> "ComplianceReport":
        """Flat report with every category at ``score``.

        Used where no rubric evaluation took place (remote-reported scores,
        the heuristic fallback).
        """
        score = max(0, min(100, int(score)))
        return cls(
            overall_score=score,
            categories={name: score for name in COMPLIANCE_CATEGORIES},
            recommendations=list(recommendations or []),
        )

    def print_rich(self, title: str = "NEP 2020 Compliance") -> None:
        """Prints the report via Rich."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(box=box.ROUNDED, show_header=True)
        table.add_column("Category")
        table.add_column("Score", justify="right")
        for name in COMPLIANCE_CATEGORIES:
            value = self.categories.get(name)
            if value is None:
                continue
            color = "green" if value >= 80 else "yellow" if value >= 60 else "red"
            table.add_row(name.replace("_", " ").title(), f"[{color}]{value}[/{color}]")
        console.print(Panel(table, title=f"{title} – overall {self.overall_score}/100",
                            border_style="cyan"))
        if self.recommendations:
            console.print("[bold]Recommendations:[/bold]")
            for r in self.recommendations:
                console.print(f"  [yellow]• {r}[/yellow]")
