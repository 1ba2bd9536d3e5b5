"""CLI for rendering and checking HAL documents."""

from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from hal_resource.config import get_config
from hal_resource.config_commands import config_app
from hal_resource.loader import load_document

logger = structlog.get_logger()

app = App(
    help="hal - build and render HAL resources",
)

app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


@app.command
def render(path: str, indent: int | None = None) -> None:
    """Render a JSON or YAML document as HAL JSON.

    Args:
        path: Document to render
        indent: Indentation level; defaults to the json.indent setting
    """
    resource = load_document(path)
    options = get_config().json_options()
    if indent is not None:
        options["indent"] = indent
    logger.debug("Rendering HAL document", path=path, **options)
    print(resource.to_json(**options))


@app.command
def validate(path: str) -> None:
    """Check that a document is a valid HAL resource and summarize it."""
    resource = load_document(path)

    embeds = resource.embedded
    relations = {link.relation for link in resource.links}

    print(f"Valid HAL document: {path}")
    print(f"Elements: {len(resource.data)}")
    print(f"Links: {len(resource.links)} ({len(relations)} relation(s))")
    print(f"Embedded: {len(embeds)}")
    for name, embed in embeds.items():
        kind = f"collection of {len(embed)}" if isinstance(embed, list) else "resource"
        print(f"  - {name} ({kind})")


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


if __name__ == "__main__":
    app.meta()
