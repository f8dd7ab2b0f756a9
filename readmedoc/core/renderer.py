import logging

import markdown

from readmedoc.plugins.equations.plugin import EquationExtension

logger = logging.getLogger(__name__)

BASELINE_EXTENSIONS = [
    'tables',
    'fenced_code',
    'attr_list',
    'def_list',
    'abbr',
    'toc',
    'pymdownx.arithmatex',
    'pymdownx.caret',
    'pymdownx.tilde',
    'pymdownx.mark',
    'pymdownx.tasklist',
]

BASELINE_EXTENSION_CONFIGS = {
    'pymdownx.arithmatex': {'generic': True},
}


def render_baseline(text, renderer=None, log=None):
    """
    Converts Markdown text to an HTML fragment.

    Equation marker blocks are resolved during conversion by the equation
    treeprocessor. Errors raised while converting (including malformed
    equation blocks) propagate unchanged.

    Args:
        text (str): Markdown source.
        renderer (callable, optional): equation image renderer `(label, alt, raw) -> str`.
        log (logging.Logger, optional): diagnostic logger.

    Returns:
        str: HTML fragment.
    """
    log = log or logger
    # A fresh instance per call keeps the HTML stash and tree private to one conversion.
    md = markdown.Markdown(
        extensions=BASELINE_EXTENSIONS + [EquationExtension(renderer=renderer, logger=log)],
        extension_configs=BASELINE_EXTENSION_CONFIGS,
    )
    log.debug(f"Converting {len(text)} characters of Markdown...")
    return md.convert(text)
