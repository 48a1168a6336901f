import json
import logging
from pathlib import Path

import click

from .cli_utils import report_generation_error
from .errors import ObservableUserDefaultError
from .pipeline import GeneratorConfig, PipelineGenerator, split_declarations
from .utils import snake_to_pascal_case

logger = logging.getLogger(__name__)


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Class name (defaults to the input file name)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default="swift", type=click.Choice(["swift", "python"]))
@click.option("--store", "-s", default=None, type=str, help="Expression for the store handle")
@click.option(
    "--accessors-only",
    is_flag=True,
    default=False,
    help="Write only the accessor pairs instead of a full module",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log each pipeline phase")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def observable_user_default(name, config, language, store, accessors_only, verbose, path, output):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    with open(path) as f:
        source = f.read()

    if config is not None:
        with open(config) as f:
            config = json.load(f)
            config = GeneratorConfig.from_dict(config)
    else:
        config = GeneratorConfig()

    # CLI flag overrides the config file
    if store:
        config.store_expression = store

    if name is None:
        name = snake_to_pascal_case(Path(path).stem)

    codegen = PipelineGenerator(config, language)

    try:
        if accessors_only:
            declarations, _ = split_declarations(source)
            pairs = [codegen.generate_accessors(declaration) for declaration in declarations]
            out = "\n\n".join(f"{pair.getter}\n{pair.setter}" for pair in pairs) + "\n"
        else:
            out = codegen.generate_module(source, name)
    except ObservableUserDefaultError as e:
        raise report_generation_error(e, Path(path).name) from e

    with open(output, "w") as f:
        f.write(out)
    logger.info("Wrote %s", output)
