"""
Language and theme tables of the code highlighter.

Both sets are fixed when the package is built; nothing is discovered at
runtime. Aliases are normalized before any lookup; an alias that is not in
the table passes through unchanged.
"""

# canonical language -> Pygments lexer name
SUPPORTED_LANGUAGES: dict[str, str] = {
    "typescript": "typescript",
    "javascript": "javascript",
    "python": "python",
    "java": "java",
    "json": "json",
    "html": "html",
    "css": "css",
    "sql": "sql",
    "shellscript": "bash",
    "go": "go",
    "rust": "rust",
    "yaml": "yaml",
    "markdown": "markdown",
}

LANGUAGE_ALIASES: dict[str, str] = {
    "ts": "typescript",
    "cts": "typescript",
    "mts": "typescript",
    "js": "javascript",
    "cjs": "javascript",
    "mjs": "javascript",
    "py": "python",
    "bash": "shellscript",
    "sh": "shellscript",
    "shell": "shellscript",
    "zsh": "shellscript",
    "rs": "rust",
    "yml": "yaml",
    "md": "markdown",
}

# display names for a language picker
LANGUAGE_NAMES: dict[str, str] = {
    "typescript": "TypeScript",
    "javascript": "JavaScript",
    "python": "Python",
    "java": "Java",
    "json": "JSON",
    "html": "HTML",
    "css": "CSS",
    "sql": "SQL",
    "shellscript": "Shell",
    "go": "Go",
    "rust": "Rust",
    "yaml": "YAML",
    "markdown": "Markdown",
}

# theme -> Pygments style name
SUPPORTED_THEMES: dict[str, str] = {
    "light-plus": "vs",
    "dark-plus": "monokai",
}


def normalize_language(language: str) -> str:
    """
    Map an alias to its canonical language name.

    >>> normalize_language("ts")
    'typescript'
    >>> normalize_language("cobol")
    'cobol'
    """
    key = language.strip().lower()
    if key in SUPPORTED_LANGUAGES:
        return key
    return LANGUAGE_ALIASES.get(key, language)


def is_supported(language: str) -> bool:
    return normalize_language(language) in SUPPORTED_LANGUAGES
