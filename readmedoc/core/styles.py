# Base stylesheets injected into the <head> of every full page.
STYLES = [
    '<link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/github-markdown-css@5/github-markdown.min.css">',
    """<style>
body {
    box-sizing: border-box;
    min-width: 200px;
    max-width: 980px;
    margin: 0 auto;
    padding: 45px;
}
nav.readme-nav {
    margin-bottom: 20px;
    font-size: 14px;
}
nav.readme-nav a {
    margin-right: 12px;
}
div.equation {
    margin: 16px 0;
    overflow-x: auto;
}
div.equation img {
    max-width: 100%;
}
</style>""",
]
