"""Jinja2 templates for the static browsing site."""
from __future__ import annotations

from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined

BASE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{% block title %}{{ title }}{% endblock %}</title>
  <link rel="stylesheet" href="{{ assets }}/styles.css">
</head>
<body>
  <main class="container">
  {% block body %}{% endblock %}
  </main>
</body>
</html>
"""

ITEM_NAV = """<nav class="item-nav">
  <a href="{{ root }}/index.html">All items</a>
  <a href="{{ root }}/{{ item.collection_id }}/{{ item.item_id }}/information/index.html">Information</a>
  <a href="{{ root }}/{{ item.collection_id }}/{{ item.item_id }}/files/index.html">Files</a>
</nav>
<h1>{{ item.title or item.label }}</h1>
"""

INDEX = """{% extends "base.html" %}
{% block body %}
<h1>{{ title }}</h1>
{% macro item_list(items) %}
<ul>
  {% for item in items %}
  <li><a href="./{{ item.collection_id }}/{{ item.item_id }}/information/index.html">{{ item.label }}</a> {{ item.title }}</li>
  {% endfor %}
</ul>
{% endmacro %}
<section id="by-identifier">
  <h2>By identifier</h2>
  {% for key, items in views.byIdentifier.items() %}<h3>{{ key }}</h3>{{ item_list(items) }}{% endfor %}
</section>
{% if views.byGenre %}
<section id="by-genre">
  <h2>By genre</h2>
  {% for key, items in views.byGenre.items() %}<h3>{{ key }}</h3>{{ item_list(items) }}{% endfor %}
</section>
{% endif %}
{% if views.bySpeaker %}
<section id="by-speaker">
  <h2>By speaker</h2>
  {% for key, items in views.bySpeaker.items() %}<h3>{{ key }}</h3>{{ item_list(items) }}{% endfor %}
</section>
{% endif %}
{% endblock %}
"""

INFORMATION = """{% extends "base.html" %}
{% block body %}
{% include "item_nav.html" %}
<dl>
  <dt>Identifier</dt><dd><a href="{{ item.identifier[1] }}">{{ item.identifier[0] }}</a></dd>
  <dt>Collection</dt><dd><a href="{{ item.collection_link }}">{{ item.collection_id }}</a></dd>
  <dt>Description</dt><dd>{{ item.description }}</dd>
  <dt>Date</dt><dd>{{ item.date }}</dd>
  <dt>Region</dt><dd>{{ item.region }}</dd>
  <dt>Languages</dt><dd>{{ item.languages | join(", ") }}</dd>
  <dt>People</dt><dd>{% for person in item.people %}{{ person.name }} ({{ person.role }}){% if not loop.last %}, {% endif %}{% endfor %}</dd>
  {% for classification in item.classifications %}
  <dt>{{ classification.name }}</dt><dd>{{ classification.value }}</dd>
  {% endfor %}
  <dt>Citation</dt><dd>{{ item.citation }}</dd>
  <dt>Access</dt><dd>{{ "Open" if item.open_access else "Restricted" }}. {{ item.rights }}</dd>
</dl>
{% endblock %}
"""

FILE_BROWSER = """{% extends "base.html" %}
{% block body %}
{% include "item_nav.html" %}
{% for group, folder, references in listing %}
{% if references %}
<h2>{{ group | capitalize }}</h2>
<ul>
  {% for reference in references %}
  <li><a href="../{{ folder }}/{{ reference.name }}{{ '.html' if folder in ('images', 'media') else '' }}">{{ reference.name }}</a>{% if reference.type %} <small>{{ reference.type }}</small>{% endif %}</li>
  {% endfor %}
</ul>
{% endif %}
{% endfor %}
{% endblock %}
"""

IMAGE_BROWSER = """{% extends "base.html" %}
{% block body %}
{% include "item_nav.html" %}
<figure>
  <img src="./content/{{ image.name }}" alt="{{ image.name }}">
  <figcaption>{{ context.meta }}</figcaption>
</figure>
<nav class="pager">
  {% if context.first %}<a href="./{{ context.first }}">First</a>{% endif %}
  {% if context.previous %}<a href="./{{ context.previous }}">Previous</a>{% endif %}
  {% if context.next %}<a href="./{{ context.next }}">Next</a>{% endif %}
  {% if context.last %}<a href="./{{ context.last }}">Last</a>{% endif %}
</nav>
{% endblock %}
"""

MEDIA_BROWSER = """{% extends "base.html" %}
{% block body %}
{% include "item_nav.html" %}
<p>{{ item.description }}</p>
<{{ kind }} controls preload="metadata">
  <source src="./content/{{ media.name }}"{% if media.type %} type="{{ media.type }}"{% endif %}>
</{{ kind }}>
{% if transcriptions %}
<h2>Transcriptions</h2>
<ul>
  {% for transcription in transcriptions %}
  <li><a href="./content/{{ transcription.name }}">{{ transcription.name }}</a></li>
  {% endfor %}
</ul>
{% endif %}
<ul class="people">
  {% for person in item.people %}<li>{{ person.name }} ({{ person.role }})</li>{% endfor %}
</ul>
{% endblock %}
"""

DOCUMENTS_BROWSER = """{% extends "base.html" %}
{% block body %}
{% include "item_nav.html" %}
<ul>
  {% for document in item.documents %}
  <li><a href="./content/{{ document.name }}">{{ document.name }}</a></li>
  {% else %}
  <li>No documents.</li>
  {% endfor %}
</ul>
{% endblock %}
"""

TEMPLATES = {
    "base.html": BASE,
    "item_nav.html": ITEM_NAV,
    "index.html": INDEX,
    "information.html": INFORMATION,
    "file-browser.html": FILE_BROWSER,
    "image-browser.html": IMAGE_BROWSER,
    "media-browser.html": MEDIA_BROWSER,
    "documents-browser.html": DOCUMENTS_BROWSER,
}

_environment = Environment(loader=DictLoader(TEMPLATES), autoescape=True, undefined=StrictUndefined)


def render(name: str, **context: Any) -> str:
    return _environment.get_template(name).render(**context)
