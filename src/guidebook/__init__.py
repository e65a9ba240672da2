"""
Guidebook - front matter and cross-reference checks for a Markdown guide corpus.

Packages:
- guidebook.core: errors, settings, logging
- guidebook.content: front matter, Markdown outline, documents, corpus
- guidebook.lint: rule-based diagnostics
- guidebook.cli: the ``guidebook`` command
"""

__version__ = "0.1.0"
