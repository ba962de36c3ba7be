"""Tests for eyebrow detection and restructuring."""

from bs4 import BeautifulSoup

from llmready.conversion.eyebrows import EYEBROW_ATTR, EyebrowPreprocessor


def parse(html):
    return BeautifulSoup(html, "html.parser")


class TestAutoDetection:
    """Tests for heuristic eyebrow marking."""

    def test_label_before_heading_is_wrapped(self):
        """Test the canonical span-before-h1 case."""
        document = parse("<span>CATEGORY</span><h1>Title</h1>")

        EyebrowPreprocessor().mark_eyebrows(document, [], auto_detect=True)

        assert str(document) == '<p data-llm-eyebrow="true"><em>CATEGORY</em></p><h1>Title</h1>'

    def test_whitespace_between_label_and_heading(self):
        """Test that whitespace-only text between label and heading is skipped."""
        document = parse("<section><small>Guide</small>\n   <h2>Setup</h2></section>")

        EyebrowPreprocessor().mark_eyebrows(document, [], auto_detect=True)

        marked = document.find("p", attrs={EYEBROW_ATTR: "true"})
        assert marked is not None
        assert marked.em.string == "Guide"
        assert document.find("small") is None

    def test_label_with_anchor_is_not_marked(self):
        """Test that an element containing a link is never an eyebrow."""
        document = parse('<span><a href="/blog">BLOG</a></span><h1>Title</h1>')

        EyebrowPreprocessor().mark_eyebrows(document, [], auto_detect=True)

        assert document.find(attrs={EYEBROW_ATTR: "true"}) is None
        assert document.find("a") is not None

    def test_long_text_is_not_marked(self):
        """Test that text over 40 characters is never an eyebrow."""
        long_label = "THIS LABEL IS FAR TOO LONG TO BE AN EYEBROW"
        document = parse(f"<span>{long_label}</span><h1>Title</h1>")

        EyebrowPreprocessor().mark_eyebrows(document, [], auto_detect=True)

        assert document.find(attrs={EYEBROW_ATTR: "true"}) is None
        assert document.find("span").get_text() == long_label

    def test_badge_classes_are_detected(self):
        """Test badge-like class names outside heading context."""
        document = parse('<article><div class="post-badge">New</div><p>Body text here.</p></article>')

        EyebrowPreprocessor().mark_eyebrows(document, [], auto_detect=True)

        assert document.find("div") is None
        assert document.find("p", attrs={EYEBROW_ATTR: "true"}).get_text() == "New"

    def test_auto_detect_disabled(self):
        """Test that heuristics are skipped when auto_detect is False."""
        document = parse('<span>CATEGORY</span><h1>Title</h1><div class="badge">Hot</div>')

        EyebrowPreprocessor().mark_eyebrows(document, [], auto_detect=False)

        assert document.find(attrs={EYEBROW_ATTR: "true"}) is None


class TestSelectorMarking:
    """Tests for selector-based eyebrow marking."""

    def test_selector_matches_are_always_marked(self):
        """Test that configured selectors skip the heuristic."""
        text = "A rather long kicker sentence that the heuristic would reject."
        document = parse(f'<div class="kicker">{text}</div><h2>Heading</h2>')

        EyebrowPreprocessor().mark_eyebrows(document, [".kicker"], auto_detect=False)

        assert document.find("p", attrs={EYEBROW_ATTR: "true"}).em.string == text

    def test_nested_matches_marked_once(self):
        """Test that a match inside an already-wrapped element is skipped."""
        document = parse('<div class="eyebrow"><span class="eyebrow">Launch</span></div><h1>T</h1>')

        EyebrowPreprocessor().mark_eyebrows(document, [".eyebrow"], auto_detect=True)

        assert len(document.find_all(attrs={EYEBROW_ATTR: "true"})) == 1
        assert document.get_text().count("Launch") == 1

    def test_invalid_selector_is_ignored(self):
        """Test that a malformed selector does not stop marking."""
        document = parse('<span class="overline">Docs</span><h1>Title</h1>')

        EyebrowPreprocessor().mark_eyebrows(document, ["span[", ".overline"], auto_detect=False)

        assert document.find("p", attrs={EYEBROW_ATTR: "true"}) is not None

    def test_empty_element_is_not_wrapped(self):
        """Test that elements without text are left in place."""
        document = parse('<span class="eyebrow"> </span><h1>Title</h1>')

        EyebrowPreprocessor().mark_eyebrows(document, [".eyebrow"], auto_detect=False)

        assert document.find("span") is not None


class TestIdempotence:
    """Running the preprocessor twice must change nothing."""

    def test_second_run_is_noop(self):
        """Test that output of two runs equals output of one run."""
        html = (
            "<main><span>FEATURED</span><h1>Launch</h1>"
            '<div class="eyebrow">Docs</div><h2>Install</h2>'
            '<span class="tag">beta</span><p>Text</p></main>'
        )
        once = parse(html)
        twice = parse(html)
        preprocessor = EyebrowPreprocessor()

        preprocessor.mark_eyebrows(once, [".eyebrow"], auto_detect=True)
        preprocessor.mark_eyebrows(twice, [".eyebrow"], auto_detect=True)
        preprocessor.mark_eyebrows(twice, [".eyebrow"], auto_detect=True)

        assert str(once) == str(twice)
        assert len(twice.find_all(attrs={EYEBROW_ATTR: "true"})) == 3


class TestLooksLikeEyebrow:
    """Tests for the eyebrow heuristic."""

    def test_uppercase_heading_tag_scores_two(self):
        """Test that uppercase short text passes even on a non-label tag."""
        element = parse("<h5>NEW</h5>").h5
        assert EyebrowPreprocessor().looks_like_eyebrow(element)

    def test_caseless_text_gets_no_uppercase_credit(self):
        """Test that scripts without case never satisfy the uppercase criterion."""
        element = parse("<h5>新闻</h5>").h5
        assert not EyebrowPreprocessor().looks_like_eyebrow(element)

    def test_accented_capitals_alone_get_no_uppercase_credit(self):
        """Test that uppercase text needs at least one A-Z letter."""
        element = parse("<h5>ÉÉ</h5>").h5
        assert not EyebrowPreprocessor().looks_like_eyebrow(element)

    def test_accented_uppercase_word_with_ascii_capital(self):
        """Test that accented capitals are fine alongside an A-Z letter."""
        element = parse("<h5>ÉTÉ</h5>").h5
        assert EyebrowPreprocessor().looks_like_eyebrow(element)

    def test_digits_alone_are_not_uppercase(self):
        """Test that text without letters is not treated as uppercase."""
        element = parse("<h5>2024</h5>").h5
        # "2024" has zero words and no letters: brevity only
        assert not EyebrowPreprocessor().looks_like_eyebrow(element)

    def test_marked_element_is_rejected(self):
        """Test that an already-marked element is not a candidate."""
        element = parse(f'<span {EYEBROW_ATTR}="true">NEW</span>').span
        assert not EyebrowPreprocessor().looks_like_eyebrow(element)
