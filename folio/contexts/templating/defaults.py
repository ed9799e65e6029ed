"""
Built-in stylesheets for FOLIO documents.

The English default is a plain serif layout. The Urdu default pulls the
Nastaliq typeface from the local font endpoint and flips headings and tables
to right-to-left.
"""

import os

from dotenv import load_dotenv

load_dotenv()
FONT_PORT = int(os.getenv("FOLIO_FONT_PORT", "8097"))
FONT_HOST = os.getenv("FOLIO_FONT_HOST", "localhost")

DEFAULT_THEME_NAME = "Default"

# Family name declared by the Urdu @font-face and reused by the RTL footer
URDU_FONT_FAMILY = "JameelNoori"

DEFAULT_ENGLISH_CSS = """body { font-family: "Times New Roman", Times, serif; line-height: 1.6; color: #333; }
h1 { background: #f4f6f8; color: #3b4455; font-family: Georgia, serif; font-size: 22pt; padding: 20px; text-align: center; border-bottom: 2px solid #1a237e; margin: 0 0 30px 0; }
h2 { color: #1a237e; font-size: 18pt; font-family: Georgia, serif; border-left: 6px solid #1a237e; padding-left: 15px; margin-top: 30px; margin-bottom: 15px; }
p { text-align: justify; margin-bottom: 15px; }"""


def font_url(host: str = FONT_HOST, port: int = FONT_PORT) -> str:
    """URL of the font endpoint as seen by the headless browser."""
    return f"http://{host}:{port}/font"


def default_urdu_css(url: str = None) -> str:
    """Urdu default stylesheet, with the @font-face pointing at the font endpoint."""
    url = url or font_url()
    return f"""@font-face {{ font-family: '{URDU_FONT_FAMILY}'; src: url('{url}') format('truetype'); }}
body {{ font-family: '{URDU_FONT_FAMILY}', 'Noto Nastaliq Urdu', serif; direction: rtl; line-height: 2.4; color: #000; text-align: right; }}
.uni-name, .uni-city {{ font-family: "Times New Roman", serif; direction: ltr; }}
.details-table .label-col, .details-table .value-col {{ text-align: right; padding-right: 20px; }}
h1 {{ background: #f4f6f8; color: #3b4455; font-size: 24pt; padding: 20px; text-align: center; border-bottom: 2px solid #1a237e; margin-bottom: 30px; }}
h2 {{ color: #1a237e; font-size: 20pt; border-right: 6px solid #1a237e; border-left: none; padding-right: 15px; padding-left: 0; margin-top: 30px; text-align: right; }}
p {{ text-align: justify; margin-bottom: 15px; }}"""


DEFAULT_URDU_CSS = default_urdu_css()
