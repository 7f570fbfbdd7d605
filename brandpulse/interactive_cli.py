#!/usr/bin/env python3
"""Interactive terminal dashboard for brand feedback.

This allows users to:
1. Enter feedback directly in the terminal and see it classified
2. View overview stats and the recent activity feed
3. Toggle the simulated live feed while they keep typing
4. Generate an executive report and edit the company profile
"""
import asyncio
import sys
from typing import Optional
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.prompt import Prompt

from .config import config
from .aggregation import build_dashboard_stats
from .ai_analyzer import AIAnalyzer
from .demo_data import seed_store
from .ingestion import ingest
from .live_poller import LivePoller
from .schemas import CompanyProfile, ExecutiveSummary, FeedbackItem, FeedbackSource, Sentiment
from .store import DashboardState
from .summary import summarize


console = Console()

SENTIMENT_STYLES = {
    Sentiment.POSITIVE: "green",
    Sentiment.NEUTRAL: "white",
    Sentiment.NEGATIVE: "red",
}


class InteractiveDashboard:
    """Interactive brand feedback dashboard."""

    def __init__(self, state: Optional[DashboardState] = None, analyzer: Optional[AIAnalyzer] = None):
        """Initialize the dashboard."""
        self.state = state if state is not None else DashboardState()
        self.analyzer = analyzer if analyzer is not None else AIAnalyzer()
        self.poller = LivePoller(self.state, self.analyzer.generate_feedback, self.analyzer.classify)
        self.state.store.subscribe(self._on_new_item)

    def _on_new_item(self, item: FeedbackItem) -> None:
        if item.source != FeedbackSource.DIRECT_INPUT:
            console.print(
                f"\n[magenta]📡 Live[/magenta] [{SENTIMENT_STYLES[item.sentiment]}]{item.sentiment.value}[/] "
                f"[dim]{item.source.value}[/dim] {item.text}"
            )

    async def analyze_feedback(self, feedback_text: str) -> FeedbackItem:
        """Classify feedback, store it and return the record.

        Args:
            feedback_text: The feedback to analyze

        Returns:
            Stored feedback item
        """
        console.print("[yellow]🤖 Analyzing with AI...[/yellow]")
        item = await ingest(feedback_text, self.state.profile, self.analyzer.classify)
        self.state.store.append(item)
        return item

    def display_item(self, item: FeedbackItem):
        """Display one analysed item in a nice format.

        Args:
            item: Feedback item to show
        """
        table = Table(
            title="📊 Analysis Results",
            box=box.ROUNDED,
            show_header=True,
            header_style="bold magenta"
        )

        table.add_column("Attribute", style="cyan", width=20)
        table.add_column("Value", style="green")

        table.add_row("Sentiment", f"[{SENTIMENT_STYLES[item.sentiment]}]{item.sentiment.value}[/]")
        table.add_row("Emotion", item.emotion)
        table.add_row("Intensity", f"{item.intensity}/10")
        table.add_row("Topics", ", ".join(f"#{topic}" for topic in item.topics))
        table.add_row("Insight", item.actionable_insight or "-")
        table.add_row("Processing Method", item.processing_method)

        console.print(table)

        if item.processing_method == "sentinel":
            console.print("[yellow]⚠️  AI unavailable, stored a placeholder record[/yellow]")

    def display_stats(self):
        """Display the overview stat cards and trending topics."""
        stats = build_dashboard_stats(self.state.store.all())

        cards = Table(box=box.ROUNDED, show_header=True, header_style="bold magenta")
        cards.add_column("Total Feedback")
        cards.add_column("Net Sentiment Score")
        cards.add_column("Critical Issues")
        cards.add_column("Positive Mentions")

        score_style = "green" if stats.net_sentiment_score >= 0 else "red"
        score_sign = "+" if stats.net_sentiment_score > 0 else ""
        cards.add_row(
            str(stats.total),
            f"[{score_style}]{score_sign}{stats.net_sentiment_score}[/]",
            f"[red]{stats.critical_issue_count}[/red]",
            f"{stats.positive} ({stats.positive_share}% of total volume)"
        )
        console.print(cards)

        distribution = "   ".join(
            f"[{SENTIMENT_STYLES[slice_.sentiment]}]{slice_.sentiment.value}: {slice_.count}[/]"
            for slice_ in stats.sentiment_distribution
        )
        console.print(f"Sentiment Distribution: {distribution}")

        topics = Table(title="Trending Topics", box=box.SIMPLE)
        topics.add_column("Topic", style="cyan")
        topics.add_column("Mentions", justify="right")
        for topic in stats.top_topics:
            topics.add_row(topic.topic, str(topic.count))
        console.print(topics)

    def display_feed(self, limit: int):
        """Display the recent activity feed, newest first."""
        table = Table(title="Recent Activity", box=box.ROUNDED, show_lines=True)
        table.add_column("Sentiment", width=10)
        table.add_column("Source / Date", style="dim", width=16)
        table.add_column("Feedback")
        table.add_column("Intensity", justify="right")

        for item in self.state.store.recent(limit):
            table.add_row(
                f"[{SENTIMENT_STYLES[item.sentiment]}]{item.sentiment.value}[/]",
                f"{item.source.value}\n{item.date.isoformat()}",
                f"{item.text}\n[blue]{' '.join('#' + t for t in item.topics)}[/blue]",
                f"{item.intensity}/10"
            )

        console.print(table)

    def display_summary(self, summary: ExecutiveSummary):
        """Display an executive report."""
        issues = "\n".join(f"  {i}. {issue}" for i, issue in enumerate(summary.top_issues, 1)) or "  -"
        actions = "\n".join(f"  → {action}" for action in summary.recommendations) or "  -"

        content = f"""
{summary.overview}

[bold red]Top Issues[/bold red]
{issues}

[bold green]Recommendations[/bold green]
{actions}

[dim]Generated on {summary.generated_at.strftime('%Y-%m-%d %H:%M')} UTC[/dim]
        """

        console.print(Panel(
            content,
            title="📈 Executive Summary",
            border_style="bold blue",
            box=box.DOUBLE,
            padding=(1, 2)
        ))

    async def generate_report(self):
        if len(self.state.store) == 0:
            console.print("[red]⚠️  No feedback to summarize yet[/red]")
            return

        console.print("[yellow]🤖 Generating executive summary...[/yellow]")
        self.state.latest_summary = await summarize(
            self.state.store.all(), self.state.profile, self.analyzer.summarize
        )
        self.display_summary(self.state.latest_summary)

    async def edit_profile(self):
        """Prompt for the company profile and replace it wholesale."""
        current = self.state.profile
        name = await asyncio.to_thread(Prompt.ask, "Company name", default=current.name)
        industry = await asyncio.to_thread(Prompt.ask, "Industry", default=current.industry)
        description = await asyncio.to_thread(Prompt.ask, "Description", default=current.description)

        self.state.set_profile(CompanyProfile(name=name, industry=industry, description=description))
        console.print("[green]✅ Profile saved[/green]")

    def toggle_live(self, argument: str):
        if argument == "on":
            if self.poller.start():
                console.print(f"[magenta]📡 Live feed on (every {self.poller.interval:g}s)[/magenta]")
            else:
                console.print("[dim]Live feed already on[/dim]")
        elif argument == "off":
            if self.poller.stop():
                console.print("[magenta]📡 Live feed off[/magenta]")
            else:
                console.print("[dim]Live feed already off[/dim]")
        else:
            console.print("[red]Usage: /live on|off[/red]")

    def display_welcome(self):
        """Display welcome message."""
        welcome = """
[bold cyan]BrandPulse Feedback Dashboard[/bold cyan]
[dim]Interactive CLI Mode[/dim]

Type any customer feedback to classify it, or use a command:
  [green]/stats[/green]          overview stats and trending topics
  [green]/feed [N][/green]       recent activity, newest first
  [green]/live on|off[/green]    toggle the simulated live feed
  [green]/report[/green]         generate an executive summary
  [green]/profile[/green]        set the company profile
  [green]quit[/green]            exit
        """

        panel = Panel(
            welcome,
            border_style="bold blue",
            box=box.DOUBLE,
            padding=(1, 2)
        )

        console.print(panel)
        console.print()

    async def handle_command(self, command: str):
        """Run a slash command."""
        name, _, argument = command.partition(" ")
        argument = argument.strip().lower()

        if name == "/stats":
            self.display_stats()
        elif name == "/feed":
            limit = int(argument) if argument.isdigit() else 10
            self.display_feed(limit)
        elif name == "/live":
            self.toggle_live(argument)
        elif name == "/report":
            await self.generate_report()
        elif name == "/profile":
            await self.edit_profile()
        else:
            console.print(f"[red]Unknown command: {name}[/red]")

    async def run_interactive(self):
        """Run the interactive CLI loop."""
        self.display_welcome()

        while True:
            console.print()
            # Prompt in a worker thread so live ticks keep running
            feedback_text = await asyncio.to_thread(Prompt.ask, "Your feedback")

            if feedback_text.lower() in ['quit', 'exit', 'q']:
                console.print("\n[cyan]Goodbye![/cyan]\n")
                break

            if not feedback_text.strip():
                console.print("[red]⚠️  Feedback cannot be empty[/red]")
                continue

            if feedback_text.startswith("/"):
                await self.handle_command(feedback_text.strip())
                continue

            item = await self.analyze_feedback(feedback_text.strip())
            self.display_item(item)
            console.print(f"\n[dim]💾 Stored as #{item.id} ({len(self.state.store)} items total)[/dim]")

        self.poller.stop()


async def main():
    """Main entry point."""
    state = DashboardState()

    if config.SEED_DEMO_DATA:
        count = seed_store(state.store)
        console.print(f"[cyan]Loaded {count} demo feedback items[/cyan]")

    dashboard = InteractiveDashboard(state)

    try:
        await dashboard.run_interactive()
    except KeyboardInterrupt:
        dashboard.poller.stop()
        console.print("\n\n[cyan] Goodbye![/cyan]\n")
        sys.exit(0)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
