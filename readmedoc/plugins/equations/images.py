import base64
import logging
import urllib.parse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

CODECOGS_SVG_URL = "https://latex.codecogs.com/svg.image"
FETCH_TIMEOUT = 10


class EquationImageRenderer:
    """
    Renders equation attributes into an HTML image element string.

    By default the image points at the CodeCogs SVG endpoint for the raw
    expression. When `base_url` is given, the image is instead expected at
    `{base_url}/equation_{label}.svg` (pre-rendered assets committed next to
    the README). With `inline=True` the SVG is fetched and embedded as a data
    URI so the page has no runtime dependency on the image host.

    Inline fetching is synchronous. Inside `convert_async` it runs on the
    event loop thread, so each equation may hold the loop for up to
    `timeout` seconds. Use pre-rendered `base_url` assets, or a renderer
    that does not fetch, when several conversions share one loop.
    """

    def __init__(self, base_url=None, inline=False, timeout=FETCH_TIMEOUT, log=None):
        self.base_url = base_url.rstrip('/') if base_url else None
        self.inline = inline
        self.timeout = timeout
        self.log = log or logger

    def image_url(self, label, raw):
        if self.base_url:
            return f"{self.base_url}/equation_{label}.svg"
        return f"{CODECOGS_SVG_URL}?{urllib.parse.quote(raw)}"

    def fetch_data_uri(self, url):
        """Fetch `url` and return it as a base64 SVG data URI, or None on failure."""
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            self.log.warning(f"Equation image fetch failed for {url}: {e}")
            return None

        if response.status_code != 200:
            self.log.warning(f"Equation image fetch failed for {url}: HTTP {response.status_code}")
            return None

        img_b64 = base64.b64encode(response.content).decode('ascii')
        return f"data:image/svg+xml;base64,{img_b64}"

    def __call__(self, label, alt, raw):
        src = self.image_url(label, raw)
        if self.inline:
            src = self.fetch_data_uri(src) or src

        soup = BeautifulSoup("", 'html.parser')
        div = soup.new_tag('div', attrs={
            'class': 'equation',
            'align': 'center',
            'data-raw-text': raw,
            'data-equation': f"eq:{label}",
        })
        img = soup.new_tag('img', attrs={'src': src, 'alt': alt})
        div.append(soup.new_string('\n    '))
        div.append(img)
        div.append(soup.new_string('\n    '))
        div.append(soup.new_tag('br'))
        div.append(soup.new_string('\n'))

        html = str(div)
        self.log.debug(f"Generated HTML: {html}")
        return html


def render_equation(label, alt, raw):
    """Render an equation element using the default renderer settings."""
    return EquationImageRenderer()(label=label, alt=alt, raw=raw)
