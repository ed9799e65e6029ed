"""
FOLIO - Formatted Output of Localized Instructional Documents

Turns markdown assignments into paginated PDFs with an institutional cover page,
rendering Latin-script documents left-to-right and Urdu documents right-to-left.

Architecture:
- Intake Context: Request data, script-direction classification, filename identity,
  batch discovery under the documents root
- Templating Context: Direction profiles, theme persistence, HTML composition
- Rendering Context: Headless-browser capture, compression, the generation pipeline
- Serving: Font endpoint and inbound JSON API
"""

__version__ = "0.1.0"
