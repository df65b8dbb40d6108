"""Render a markdown chat reply to HTML from the command line.

Reads the reply from a file (or stdin when no file is given) and prints the
HTML fragment the chat window would display.

Usage:
  python scripts/render_markdown.py reply.md
  echo "**hi**" | python scripts/render_markdown.py --wrap
"""

import argparse
import logging
import sys
from pathlib import Path

from wellness_chat.rendering.renderer import render

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def main():
    """Render the input and write the HTML to stdout."""
    parser = argparse.ArgumentParser(description="Render chat-reply markdown to an HTML fragment")
    parser.add_argument("path", nargs="?", type=Path, help="Markdown file to render (default: stdin)")
    parser.add_argument("--wrap", action="store_true", help='Wrap output in <div class="message-text"> like the chat window')
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8") if args.path else sys.stdin.read()
    logger.info("Rendering %d chars", len(text))

    html = render(text)
    if args.wrap:
        html = f'<div class="message-text">{html}</div>'
    print(html)


if __name__ == "__main__":
    main()
