"""motdyn - report rendering and command line entry point."""

from collections.abc import Sequence

import click
from rich.console import Console
from rich.text import Text

from motdyn import __version__, hook
from motdyn.config import MotdConfig, load_merged_config
from motdyn.facts import FactsProvider
from motdyn.formatting import human_readable_usage
from motdyn.logutil import init_logging
from motdyn.models import DiskUsage, Fact, HostSnapshot
from motdyn.monitor import HostMonitor
from motdyn.settings import Settings

HEADLINE = "Welcome!"
VERBOSE_LINE = "Verbose mode: put extra info here."
LABEL_STYLE = "bright_white"
ACCENT_STYLE = "bold cyan"

console = Console(soft_wrap=True, highlight=False)

# Also accepted after a subcommand, as in `motdyn status -v`
subcommand_verbose = click.option(
    "-v", "--verbose", is_flag=True, expose_value=False, help="Accepted for compatibility; no effect"
)


def format_fact_lines(facts: Sequence[Fact]) -> list[Text]:
    """Render facts as label/value lines with labels padded to a common width."""
    width = max((len(fact.label) for fact in facts), default=0)
    return [
        Text.assemble(
            (fact.label.ljust(width), LABEL_STYLE),
            " ",
            (fact.display(), fact.style or ""),
        )
        for fact in facts
    ]


def format_disk_line(disk: DiskUsage) -> Text:
    used, total, percent = human_readable_usage(disk.used, disk.total)
    return Text.assemble(
        (disk.label, LABEL_STYLE),
        " ",
        (disk.mount_point, "bright_yellow"),
        f" => {used}/{total} ({percent:.2f}%)",
    )


def render_motd(
    snapshot: HostSnapshot,
    config: MotdConfig,
    out: Console,
    verbose: bool = False,
) -> None:
    """Print the banner, the host facts and the farewell line."""
    if config.ascii_art is not None:
        out.print()
        out.print(Text(config.ascii_art))
        out.print()

    out.print(Text(HEADLINE, style=ACCENT_STYLE))
    out.print()

    for line in format_fact_lines(snapshot.facts):
        out.print(line)
    for disk in snapshot.disks:
        out.print(format_disk_line(disk))

    if verbose:
        out.print(Text(VERBOSE_LINE, style=ACCENT_STYLE))

    out.print()
    out.print(Text(config.farewell_text(), style=ACCENT_STYLE))


def run_motd(
    settings: Settings,
    verbose: bool = False,
    provider: FactsProvider | None = None,
    out: Console | None = None,
) -> None:
    """Merge configuration, collect host facts and print the report."""
    provider = provider or FactsProvider.for_host()
    config = load_merged_config(settings.system_config, settings.user_config, provider.environ)
    snapshot = HostMonitor(provider).collect_snapshot()
    render_motd(snapshot, config, out or console, verbose=verbose)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="motdyn")
@click.option("-v", "--verbose", is_flag=True, help="Show more detailed info when printing")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """MOTD with system info, plus install/uninstall/status subcommands."""
    settings = Settings()
    init_logging(settings.log_level)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        run_motd(settings, verbose=verbose)


@main.command("install")
@subcommand_verbose
@click.pass_obj
def install_cmd(settings: Settings) -> None:
    """Install motdyn so that it prints on login."""
    try:
        hook.install(settings.profile_dir)
    except hook.HookError as exc:
        raise click.ClickException(f"Install failed: {exc}") from exc
    click.echo("Install successful!")


@main.command("uninstall")
@subcommand_verbose
@click.pass_obj
def uninstall_cmd(settings: Settings) -> None:
    """Uninstall motdyn so it no longer prints on login."""
    try:
        hook.uninstall(settings.profile_dir)
    except hook.HookError as exc:
        raise click.ClickException(f"Uninstall failed: {exc}") from exc
    click.echo("Uninstall successful!")


@main.command("status")
@subcommand_verbose
@click.pass_obj
def status_cmd(settings: Settings) -> None:
    """Check whether the login hook script is installed."""
    click.echo(hook.status_message(settings.profile_dir))


if __name__ == "__main__":
    main()
