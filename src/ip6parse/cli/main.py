import typer
from rich.console import Console
from rich.table import Table

from ip6parse.analysis.errors import ParseStatus, describe
from ip6parse.analysis.ip6_parser import IPv6Parser, NULL_TERMINATED
from ip6parse.analysis.parse_stats import ParseStatistics

DEFAULT_ADDRESS = "2001-0db8-1234-5678 0000-0000-0000-0005"
DEFAULT_TRUNCATE_ADDRESS = "2001:0db8::1234:5678:8abc:deff"

app = typer.Typer(help="ip6parse - Turn loosely typed IPv6 addresses into 16 raw bytes")
console = Console()
parser = IPv6Parser()


def format_groups(ip6):
    # 2001-0db8-1234-5678 0000-0000-0000-0005
    quads = [f"{ip6[i]:02x}{ip6[i + 1]:02x}" for i in range(0, len(ip6), 2)]
    return "-".join(quads[:4]) + " " + "-".join(quads[4:])


def error_text(status):
    return f"error code {int(status)}: {describe(status)}"


@app.command()
def parse(
    address: str = typer.Argument(DEFAULT_ADDRESS, help="IPv6 address to parse"),
    length: int = typer.Option(NULL_TERMINATED, "--length", "-l", help="number of characters to read (-1 reads the whole string)"),
):
    """
        ip6parse parse 2001:db8::1
        ip6parse parse "2001:0db8::1234:5678" --length 11
    """
    ip6, status = parser.parse(address, length)
    if status != ParseStatus.OK:
        console.print(f"[bold red]{address!r}: {error_text(status)}[/bold red]")
        raise typer.Exit(code=1)

    console.print(format_groups(ip6))


@app.command()
def truncate(
    address: str = typer.Argument(DEFAULT_TRUNCATE_ADDRESS, help="IPv6 address to truncate"),
    start: int = typer.Option(11, "--start", help="first declared length"),
    stop: int = typer.Option(30, "--stop", help="declared length to stop before"),
):
    """
    Parse ADDRESS once for every declared length in [start, stop)
    """
    table = Table(title=f"Truncations of {address}")
    table.add_column("Length", justify="right", style="cyan")
    table.add_column("Input", style="yellow")
    table.add_column("Result")

    for length in range(start, stop):
        ip6, status = parser.parse(address, length)
        shown = address[:length] if length > 0 else ""
        if status == ParseStatus.OK:
            result = f"[green]{format_groups(ip6)}[/green]"
        else:
            result = f"[red]{error_text(status)}[/red]"
        table.add_row(str(length), shown, result)

    console.print(table)


@app.command()
def check(
    file: str = typer.Argument(..., help="file with one address per line"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="also list the addresses that parsed"),
):
    """
        ip6parse check resolver.conf
        blank lines and lines starting with # are skipped
    """
    try:
        with open(file, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Could not read {file}: {e}[/bold red]")
        raise typer.Exit(code=2)

    stats = ParseStatistics()
    table = Table(title=f"Results for {file}")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Address", style="cyan")
    table.add_column("Result")

    for number, line in enumerate(lines, start=1):
        address = line.strip()
        if not address or address.startswith("#"):
            continue

        ip6, status = parser.parse(address)
        stats.update(address, status)

        if status != ParseStatus.OK:
            table.add_row(str(number), address, f"[red]{error_text(status)}[/red]")
        elif verbose:
            table.add_row(str(number), address, f"[green]{format_groups(ip6)}[/green]")

    if table.row_count:
        console.print(table)
    show_stats(stats)

    if stats.stats['failed']:
        raise typer.Exit(code=1)


def show_stats(stats):
    summary = stats.get_summary()

    console.print("\n[bold]Parse Statistics:[/bold]")
    console.print(f"  Total: {summary['total']}")
    console.print(f"  Parsed: [green]{summary['parsed']}[/green]")
    console.print(f"  Failed: [red]{summary['failed']}[/red]")

    for name, count in sorted(summary['errors'].items()):
        console.print(f"    {name}: {count}")

    if summary['bad_chars']:
        chars = ", ".join(repr(c) for c in summary['bad_chars'])
        console.print(f"  Bad characters: [dim]{chars}[/dim]")


if __name__ == "__main__":
    app()
