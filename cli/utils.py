import click
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional
from shelf.lifecycle import status_label
from shelf.merge import DisplayBook


@dataclass
class SkippedRow:
    title: str
    raw_id: str
    reason: str


@dataclass
class ImportSummary:
    """Counts for one run of the reading-history import"""
    dry_run: bool = False
    processed: int = 0
    imported: int = 0
    skipped: List[SkippedRow] = field(default_factory=list)

    def skip(self, title: str, raw_id, reason: str):
        self.skipped.append(SkippedRow(title=title, raw_id=str(raw_id), reason=reason))

    def skip_reasons(self) -> Counter:
        return Counter(row.reason for row in self.skipped)

    def print_results(self, verbose: bool = False):
        click.echo("\n" + click.style("Results:", fg='blue'))
        click.echo(f"Processed: {self.processed} books")
        verb = "Would import" if self.dry_run else "Imported"
        click.echo(click.style(f"{verb}: {self.imported} books", fg='green'))

        if not self.skipped:
            return
        for reason, count in self.skip_reasons().most_common():
            click.echo(click.style(f"Skipped {count}: {reason}", fg='yellow'))
        if verbose:
            for row in self.skipped:
                click.echo(f"  {row.title} (ID: {row.raw_id}) - {row.reason}")


STATUS_COLORS = {
    'reading': 'blue',
    'finished': 'green',
    'want_to_read': 'yellow',
    'dnf': 'red',
}

def format_display_book(book: DisplayBook) -> str:
    """One line summary of a shelved book"""
    label = click.style(f"[{status_label(book.status)}]", fg=STATUS_COLORS.get(book.status, 'white'))
    line = f"{label} {book.title} - {book.author} (Hardcover ID: {book.hardcover_id})"
    if book.is_favorite:
        line += click.style(" *", fg='magenta')
    if book.status == 'reading' and book.current_page:
        progress: Optional[float] = book.progress_percent
        line += f" p.{book.current_page}" + (f" ({progress:.0f}%)" if progress is not None else "")
    return line
