"""Post-processing for converter output.

The converter's Markdown is structurally right but noisy: headings glued to
labels, padded link brackets, stray emphasis, split prices, ragged
indentation. ``MarkdownCleaner.clean`` runs a fixed list of rewrite passes,
each relying on the state the previous ones leave behind, so the order in
``clean`` matters.
"""

import re
from typing import Callable

FENCE = "```"

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")

_INLINE_HEADING_RE = re.compile(r"^(.+?)[^\S\n]+(#{1,6})[^\S\n]+(.+)$")
_HEADING_LINE_RE = re.compile(r"^#{1,6}[ \t]")
_DOUBLE_HEADING_RE = re.compile(r"^(#{1,6})(?:[ \t]+#{1,6})+[ \t]+")
_EMPHASIZED_RE = re.compile(r"^\*+[^*]+\*+$")

_LINK_TEXT_RE = re.compile(r"\[([^\[\]\n]+)\]")
_LINK_URL_RE = re.compile(r"\]\([^\S\n]*([^()\s][^()\n]*?)[^\S\n]*\)")
_LINK_GAP_RE = re.compile(r"\][^\S\n]+\(")

_TRIPLE_EMPHASIS_RE = re.compile(r"\*{3}([^*\n]+)\*{3}")
_UPPERCASE_BOLD_LINE_RE = re.compile(r"^\*\*([A-Z][A-Z ]{0,30})\*\*$", re.MULTILINE)

_MULTI_DOLLAR_RE = re.compile(r"\${2,}[^\S\n]*(\d)")
_DOLLAR_GAP_RE = re.compile(r"\$[^\S\n]+(\d)")
_PRICE_UNIT_RE = re.compile(r"[^\S\n]+/(mo|yr|month|year|week|day)\b", re.IGNORECASE)

_INTERIOR_SPACES_RE = re.compile(r"(?<=\S) {2,}(?=\S)")
_LIST_ITEM_RE = re.compile(r"^\s*([-*+]|\d+\.)(?:\s|$)")

_BLANK_RUN_RE = re.compile(r"\n{3,}")
_TRAILING_WS_RE = re.compile(r"[ \t]+$", re.MULTILINE)

MAX_LABEL_LENGTH = 30
MAX_SHORT_EMPHASIS = 40

# Upper bound on cleanup rounds; real converter output settles in one or two
MAX_ROUNDS = 10


def _is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE)


class MarkdownCleaner:
    """
    Normalizes converter output into clean, consistent Markdown.

    ``clean`` is pure, deterministic and never raises. Its output has '\\n'
    line endings, no control characters, at most one blank line between
    blocks, no trailing whitespace, headings set apart by blank lines, and
    exactly one trailing newline.

    Example:
        cleaner = MarkdownCleaner()
        cleaner.clean("Pricing ### Plans")
        # '**Pricing**\\n\\n### Plans\\n'
    """

    def clean(self, markdown: str) -> str:
        """Clean and normalize markdown output.

        A pass can expose a match for an earlier one ('****a****' only loses
        its inner triple emphasis after the outer one is gone), so the passes
        repeat until the text stops changing. That makes ``clean`` idempotent.
        """
        cleaned = self._clean_once(markdown)
        for _ in range(MAX_ROUNDS - 1):
            again = self._clean_once(cleaned)
            if again == cleaned:
                break
            cleaned = again
        return cleaned

    def _clean_once(self, markdown: str) -> str:
        markdown = markdown.replace("\r\n", "\n").replace("\r", "\n")
        markdown = _CONTROL_CHARS_RE.sub("", markdown)

        markdown = self._outside_code(
            markdown,
            self.fix_inline_headings,
            self.fix_link_formatting,
            self.fix_excessive_emphasis,
            self.fix_price_formatting,
            self.collapse_spaces,
        )

        markdown = self.fix_line_start_spaces(markdown)
        markdown = self.normalize_heading_spacing(markdown)

        markdown = _BLANK_RUN_RE.sub("\n\n", markdown)
        markdown = _TRAILING_WS_RE.sub("", markdown)

        return markdown.strip() + "\n"

    def fix_inline_headings(self, markdown: str) -> str:
        """
        Split headings that appear mid-line.

        "Pricing ### Flexible pricing plan" becomes
        "**Pricing**\\n\\n### Flexible pricing plan". A short label without a
        period is emphasized (single asterisks if all uppercase); anything
        longer is just moved to its own paragraph.
        """
        lines = []
        for line in markdown.split("\n"):
            stripped = line.lstrip()
            if _HEADING_LINE_RE.match(stripped) or stripped.startswith("|"):
                lines.append(line)
                continue
            lines.append(_INLINE_HEADING_RE.sub(self._split_inline_heading, line))
        return "\n".join(lines)

    @staticmethod
    def _split_inline_heading(match: "re.Match[str]") -> str:
        before = match.group(1).strip()
        level = match.group(2)
        heading = match.group(3).strip()

        if not before:
            return f"{level} {heading}"

        if len(before) < MAX_LABEL_LENGTH and "." not in before and not _EMPHASIZED_RE.match(before):
            if before.upper() == before:
                return f"*{before}*\n\n{level} {heading}"
            return f"**{before}**\n\n{level} {heading}"

        return f"{before}\n\n{level} {heading}"

    def fix_link_formatting(self, markdown: str) -> str:
        """
        Remove padding inside links.

        "[ Link Text ]( #url )" becomes "[Link Text](#url)". Empty brackets
        such as task-list "[ ]" are left alone.
        """
        markdown = _LINK_TEXT_RE.sub(self._strip_bracket, markdown)
        # The gap goes first so "[a] ( b )" is recognized as a link target
        markdown = _LINK_GAP_RE.sub("](", markdown)
        return _LINK_URL_RE.sub(r"](\1)", markdown)

    @staticmethod
    def _strip_bracket(match: "re.Match[str]") -> str:
        text = match.group(1).strip()
        if not text:
            return match.group(0)
        return f"[{text}]"

    def fix_excessive_emphasis(self, markdown: str) -> str:
        """
        Tone down emphasis on short labels.

        "***Text***" becomes "*Text*" for text up to 40 characters, and a
        line reading "**UPPERCASE LABEL**" becomes "*UPPERCASE LABEL*".
        """

        def simplify(match: "re.Match[str]") -> str:
            text = match.group(1)
            if len(text) <= MAX_SHORT_EMPHASIS:
                return f"*{text}*"
            return match.group(0)

        markdown = _TRIPLE_EMPHASIS_RE.sub(simplify, markdown)
        return _UPPERCASE_BOLD_LINE_RE.sub(r"*\1*", markdown)

    def fix_price_formatting(self, markdown: str) -> str:
        """
        Re-join prices split by the converter.

        "$$ 10" and "$ 10" become "$10"; "10 /mo" becomes "10/mo".
        """
        markdown = _MULTI_DOLLAR_RE.sub(r"$\1", markdown)
        markdown = _DOLLAR_GAP_RE.sub(r"$\1", markdown)
        return _PRICE_UNIT_RE.sub(r"/\1", markdown)

    def collapse_spaces(self, markdown: str) -> str:
        """Collapse runs of interior spaces; leading indentation is kept."""
        return _INTERIOR_SPACES_RE.sub(" ", markdown)

    def fix_line_start_spaces(self, markdown: str) -> str:
        """Strip leading spaces, keeping code blocks and list nesting (2 spaces per level)."""
        result = []
        in_code_block = False

        for line in markdown.split("\n"):
            if _is_fence(line):
                in_code_block = not in_code_block
                result.append(line)
                continue

            if in_code_block:
                result.append(line)
                continue

            if _LIST_ITEM_RE.match(line):
                trimmed = line.lstrip()
                indent_level = (len(line) - len(trimmed)) // 2
                result.append("  " * indent_level + trimmed)
                continue

            result.append(line.lstrip())

        return "\n".join(result)

    def normalize_heading_spacing(self, markdown: str) -> str:
        """Put exactly one blank line around headings outside code blocks."""
        lines = markdown.split("\n")
        result: list[str] = []
        in_code_block = False

        for i, line in enumerate(lines):
            if _is_fence(line):
                in_code_block = not in_code_block
                result.append(line)
                continue

            if in_code_block or not _HEADING_LINE_RE.match(line):
                result.append(line)
                continue

            if result and result[-1].strip():
                result.append("")

            result.append(_DOUBLE_HEADING_RE.sub(r"\1 ", line))

            if i + 1 < len(lines) and lines[i + 1].strip():
                result.append("")

        return "\n".join(result)

    def _outside_code(self, markdown: str, *passes: Callable[[str], str]) -> str:
        """Apply passes to the text between fenced code blocks only."""
        segments: list[tuple[bool, list[str]]] = []
        current: list[str] = []
        in_code_block = False

        for line in markdown.split("\n"):
            if _is_fence(line):
                if in_code_block:
                    current.append(line)
                    segments.append((True, current))
                    current = []
                else:
                    segments.append((False, current))
                    current = [line]
                in_code_block = not in_code_block
                continue
            current.append(line)
        segments.append((in_code_block, current))

        output = []
        for is_code, segment_lines in segments:
            if not segment_lines:
                continue
            text = "\n".join(segment_lines)
            if not is_code:
                for rewrite in passes:
                    text = rewrite(text)
            output.append(text)

        return "\n".join(output)
