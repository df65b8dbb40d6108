"""Markdown-to-HTML rendering for AI chat replies.

Submodules:
  patterns      -- compiled regex patterns and constants
  errors        -- internal fault types (never raised out of render)
  schema        -- TableBlock Pydantic model
  placeholders  -- PlaceholderStore: tokens shielding finished HTML
  inline        -- code, bold and italic rules
  tables        -- table detection and HTML rendering (extract_tables)
  renderer      -- the ordered pipeline and render() entry point
"""
