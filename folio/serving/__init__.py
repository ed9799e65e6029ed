"""
Serving

Responsibilities:
- Serves the embedded Urdu typeface to the headless browser (font endpoint)
- Exposes generation, theme management and batch discovery over JSON

Owns: HTTP surface
Never: Renders documents itself (delegates to the rendering context)
"""
