import json
import logging
from pathlib import Path

import click

from .pipeline import AtomicWriter, ClosureChecker, ExternsConfig, ExternsError, OutputMode, PipelineGenerator


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--force/--no-force",
    default=None,
    help="Overwrite an existing output file (overrides config file if set)",
)
@click.option(
    "--check/--no-check",
    default=None,
    help="Run the Closure Compiler on the generated externs (overrides config file if set)",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", default=None, required=False, type=click.Path(dir_okay=False, resolve_path=True))
def webidl_to_closure_externs(config, force, check, verbose, path, output):
    """Generate Closure externs from a webidl2 JSON AST.

    PATH is the JSON dump of webidl2.parse(); OUTPUT defaults to PATH with a .js suffix.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            config = ExternsConfig.from_dict(json.load(f))
    else:
        config = ExternsConfig()

    # CLI flags override the config file
    if force is not None:
        config.output.mode = OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS
    if check is not None:
        config.closure.enabled = check

    output = Path(output) if output is not None else Path(path).with_suffix(".js")

    try:
        out = PipelineGenerator.from_file(path, config).generate()
        AtomicWriter(config.output).write(output, out)
        click.echo(f"{output} written.", err=True)

        if config.closure.enabled:
            click.echo("Running Closure compiler...", err=True)
            ClosureChecker(config.closure).check(output)
    except (ExternsError, FileExistsError, json.JSONDecodeError) as e:
        raise click.ClickException(str(e)) from e
