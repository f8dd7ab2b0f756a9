import logging
from dataclasses import asdict, dataclass
from typing import List, Optional

import jinja2

from readmedoc.core.html_template import TEMPLATE
from readmedoc.core.styles import STYLES

logger = logging.getLogger(__name__)

_env = jinja2.Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)
_template = _env.from_string(TEMPLATE)


@dataclass
class ViewModel:
    title: str
    tests: Optional[str]
    benchmarks: Optional[str]
    source: Optional[str]
    head: List[str]
    prepend: Optional[List[str]]
    append: Optional[List[str]]
    readme: str


def build_view(options, html):
    """Combine validated options with a converted HTML fragment."""
    head = STYLES.copy()
    if options.head:
        head.append(options.head)
    return ViewModel(
        title=options.title,
        tests=options.tests,
        benchmarks=options.benchmarks,
        source=options.source,
        head=head,
        prepend=[options.prepend] if options.prepend else None,
        append=[options.append] if options.append else None,
        readme=html,
    )


def render_page(view, log=None):
    log = log or logger
    log.debug("Rendering...")
    html = _template.render(**asdict(view))
    log.debug("Finished rendering.")
    return html
