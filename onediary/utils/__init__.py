"""
Utilities package for the OneDiary importer.

- txt: Sentence boundaries and paragraph reflow
- md: Frontmatter, YAML escaping, same-day note merging
- fs: Note and attachment paths

Import commonly-used utilities directly from this package:
    from onediary.utils import reflow_paragraphs, merge_entry_content
"""

# Text processing utilities
from .txt import (
    SENTENCE_TERMINALS,
    clean_text,
    count_characters,
    ends_sentence,
    format_body,
    reflow_paragraphs,
)

# Markdown utilities
from .md import (
    embed_link,
    entry_blocks,
    merge_entry_content,
    merge_entry_content_with_attachments,
    split_frontmatter,
    yaml_escape,
)

# Filesystem utilities
from .fs import (
    attachment_name,
    ensure_folder,
    note_folder,
)

__all__ = [
    # Text
    "SENTENCE_TERMINALS",
    "clean_text",
    "count_characters",
    "ends_sentence",
    "format_body",
    "reflow_paragraphs",
    # Markdown
    "embed_link",
    "entry_blocks",
    "merge_entry_content",
    "merge_entry_content_with_attachments",
    "split_frontmatter",
    "yaml_escape",
    # Filesystem
    "attachment_name",
    "ensure_folder",
    "note_folder",
]
