"""HTML pages served alongside the API."""

from pathlib import Path

from liquid import Environment, FileSystemLoader

from shortener.core.modules.link.models import Link

STATIC_DIR = Path(__file__).parent / "static"
TEMPLATES_DIR = Path(__file__).parent / "templates"

_env = Environment(loader=FileSystemLoader(TEMPLATES_DIR))


def render_links_page(links: list[Link]) -> str:
    template = _env.get_template("links.liquid")
    return template.render(links=[{"slug": link.slug, "destination": link.destination} for link in links])
