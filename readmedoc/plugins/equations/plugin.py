import logging
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import HTML_PLACEHOLDER_RE

from readmedoc.core.errors import MalformedBlockError
from readmedoc.core.markers import is_end_marker, is_start_marker, parse_attributes
from readmedoc.plugins.equations.images import render_equation

logger = logging.getLogger(__name__)

# Runs after the inline pass (priority 20): comments nested in blockquotes and
# list items are only stashed there, block-level ones by the preprocessor.
TREEPROCESSOR_PRIORITY = 15


class EquationTreeprocessor(Treeprocessor):
    """
    Inserts rendered equation images between equation marker comments.

    Python-Markdown stores raw HTML (comments included) in its HTML stash.
    A comment standing alone in its own block, whether at the top level or
    inside a blockquote or list item, ends up as a `<p>` holding only the
    stash placeholder. Those placeholders are the nodes this pass reads and
    writes:

        <!-- <equation label="..." alt="..." raw="..."> -->
        [previously generated image, replaced on re-render]
        <!-- </equation> -->
    """

    def __init__(self, md, renderer=None, log=None):
        super().__init__(md)
        self.renderer = renderer or render_equation
        self.log = log or logger

    def node_value(self, node):
        """Return the raw HTML held by a stash placeholder node, else None."""
        if node.tag != 'p' or len(node) or not node.text:
            return None
        m = HTML_PLACEHOLDER_RE.fullmatch(node.text.strip())
        if m is None:
            return None
        index = int(m.group(1))
        if index >= len(self.md.htmlStash.rawHtmlBlocks):
            return None
        raw = self.md.htmlStash.rawHtmlBlocks[index]
        return raw if isinstance(raw, str) else None

    def value_at(self, parent, index):
        if index >= len(parent):
            return None
        return self.node_value(parent[index])

    def create_image_node(self, value):
        attrs = parse_attributes(value, log=self.log)
        html = self.renderer(label=attrs.label, alt=attrs.alt, raw=attrs.raw)
        node = etree.Element('p')
        node.text = self.md.htmlStash.store(html)
        return node

    def process_children(self, parent):
        """Rewrite every marker pair in `parent`'s child list. Returns the pair count."""
        count = 0
        index = 0
        while index < len(parent):
            value = self.node_value(parent[index])
            if not is_start_marker(value):
                index += 1
                continue

            self.log.debug("Found an equation...")
            node = self.create_image_node(value)

            if is_end_marker(self.value_at(parent, index + 1)):
                self.log.debug("Inserting new node...")
                parent.insert(index + 1, node)
            elif is_end_marker(self.value_at(parent, index + 2)):
                self.log.debug("Replacing existing node...")
                parent[index + 1] = node
            else:
                self.log.debug(f"Invalid node: {value}")
                raise MalformedBlockError(value)

            # Skip start marker, image and end marker.
            index += 3
            count += 1
        return count

    def run(self, root):
        # Snapshot parents first; inserted image nodes never have children.
        parents = [el for el in root.iter() if len(el)]
        total = sum(self.process_children(parent) for parent in parents)
        if total:
            self.log.debug(f"Rendered {total} equation(s).")
        return None


class EquationExtension(Extension):
    """Python-Markdown extension registering the equation treeprocessor."""

    def __init__(self, **kwargs):
        self.config = {
            'renderer': [render_equation, "Callable (label, alt, raw) -> HTML image element string"],
            'logger': [logger, "Logger receiving diagnostic messages"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        processor = EquationTreeprocessor(
            md,
            renderer=self.getConfig('renderer') or render_equation,
            log=self.getConfig('logger') or logger,
        )
        md.treeprocessors.register(processor, 'equations', TREEPROCESSOR_PRIORITY)


def makeExtension(**kwargs):
    return EquationExtension(**kwargs)
