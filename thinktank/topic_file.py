"""Read a debate topic from a markdown file with optional YAML frontmatter."""

from pathlib import Path

import frontmatter

# Frontmatter keys that override config defaults for one debate
TOPIC_SETTINGS = ("mode", "rounds", "model", "host_model", "language", "max_tokens")


def parse_topic_file(file_path: Path) -> tuple[str, dict]:
    """Parse a markdown topic file.

    Returns:
        (topic, settings) where topic is the body text and settings holds
        only the recognised frontmatter keys (see TOPIC_SETTINGS).
        If there is no frontmatter, settings is {}.

    Raises:
        ValueError: If the body is empty.
    """
    post = frontmatter.load(str(file_path))
    topic = post.content.strip()
    if not topic:
        raise ValueError(f"Topic file has no body: {file_path}")
    settings = {k: v for k, v in post.metadata.items() if k in TOPIC_SETTINGS}
    return topic, settings
