"""tickstats CLI."""

import sys

import click

from tickstats.app import TickStatsApp


@click.group()
def cli():
    """tickstats Command Line Interface."""
    pass


@cli.command()
@click.option(
    "--config",
    type=click.Path(exists=True),
    default="config/config.yaml",
    help="Path to configuration file",
)
@click.option("--data", type=click.Path(exists=True), help="Override tick data file")
@click.option("--output", type=click.Path(), help="Override report destination")
@click.option("--limit", type=click.IntRange(min=0), help="Read at most this many lines (0 = all)")
@click.option("--workers", type=click.IntRange(min=1), help="Symbol partitions to process in parallel")
def run(config, data, output, limit, workers):
    """Compute per-symbol tick statistics and write the report."""
    from tickstats.report.writer import render_summary

    try:
        app = TickStatsApp(
            config_path=config,
            data_path=data,
            output_path=output,
            row_limit=limit,
            workers=workers,
        )
        app.initialize()
        table = app.run()
    except Exception as e:
        click.echo(f"Fatal error: {e}", err=True)
        sys.exit(1)

    click.echo(render_summary(table, source=app.config.input.path))
    if app.load_stats is not None:
        click.echo(app.load_stats.summary())
    click.echo(f"Report: {app.report_path}")
    click.echo(f"Execution time: {app.elapsed_ms:.0f} milliseconds")


@cli.command()
@click.argument("symbol")
@click.option(
    "--config",
    type=click.Path(exists=True),
    default="config/config.yaml",
    help="Path to configuration file",
)
@click.option("--data", type=click.Path(exists=True), help="Override tick data file")
@click.option("--limit", type=click.IntRange(min=0), help="Read at most this many lines (0 = all)")
def symbol(symbol, config, data, limit):
    """Show statistics for a single symbol."""
    try:
        app = TickStatsApp(config_path=config, data_path=data, row_limit=limit)
        app.initialize()
        table = app.run(write_report=False)
    except Exception as e:
        click.echo(f"Fatal error: {e}", err=True)
        sys.exit(1)

    snapshot = table.lookup(symbol)
    if snapshot is None:
        click.echo(f"Symbol not found: {symbol}", err=True)
        sys.exit(1)

    click.echo(f"Symbol: {snapshot.symbol}")
    click.echo(f"  Orders: {snapshot.order_count}")
    click.echo(
        f"  Trade time: mean {snapshot.mean_trade_interval:.6f}s, "
        f"median {snapshot.median_trade_interval:.6f}s, longest {snapshot.max_trade_interval:.6f}s"
    )
    click.echo(
        f"  Tick time: mean {snapshot.mean_tick_interval:.4f}s, "
        f"median {snapshot.median_tick_interval:.4f}s, longest {snapshot.max_tick_interval:.4f}s"
    )
    click.echo(f"  Spread: mean {snapshot.mean_spread:g}, median {snapshot.median_spread:g}")


@cli.command("validate-config")
@click.option(
    "--config",
    type=click.Path(exists=True),
    default="config/config.yaml",
    help="Path to configuration file",
)
def validate_config(config):
    """Load and validate a configuration file."""
    import yaml

    from tickstats.config_loader import load_config

    try:
        cfg = load_config(config)
    except Exception as e:
        click.echo(f"Invalid config: {e}", err=True)
        sys.exit(1)

    click.echo(yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False, sort_keys=False))


if __name__ == "__main__":
    cli()

main = cli
