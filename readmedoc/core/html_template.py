# Page template. `head`, `prepend`, `append` and `readme` hold trusted markup.
TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
{% for item in head %}
{{ item | safe }}
{% endfor %}
</head>
<body>
{% if tests or benchmarks or source %}
<nav class="readme-nav">
{% if tests %}<a href="{{ tests }}">Tests</a>{% endif %}
{% if benchmarks %}<a href="{{ benchmarks }}">Benchmarks</a>{% endif %}
{% if source %}<a href="{{ source }}">Source</a>{% endif %}
</nav>
{% endif %}
{% for item in prepend or [] %}
{{ item | safe }}
{% endfor %}
<article class="markdown-body readme">
{{ readme | safe }}
</article>
{% for item in append or [] %}
{{ item | safe }}
{% endfor %}
</body>
</html>
"""
