"""
Tests for the greedy card paginator and its splitters.
"""

import pytest

from conftest import items, lines_config, paragraph
from mdcards.cleaning import split_words
from mdcards.models import (
    CodeBlock,
    Generic,
    Heading,
    ImageRef,
    ListBlock,
    ListItem,
    Rule,
    block_text,
)
from mdcards.paging.page_filter import any_content
from mdcards.paging.page_oracle import MeasurementError
from mdcards.pagination import paginate_blocks, paginate_section


def _only(page):
    assert len(page.blocks) == 1
    return page.blocks[0]


class TestListSplitting:
    """Item-granular list splitting."""

    def test_five_items_three_per_page(self, oracle):
        block = ListBlock(ordered=True, items=items("a", "b", "c", "d", "e"))
        pages = paginate_blocks(blocks=[block], config=lines_config(3), oracle=oracle)

        assert len(pages) == 2
        first, second = _only(pages[0]), _only(pages[1])
        assert [item.text for item in first.items] == ["a", "b", "c"]
        assert first.start == 1
        assert [item.text for item in second.items] == ["d", "e"]
        assert second.start == 4

    def test_numbering_continues_after_preceding_paragraph(self, oracle):
        blocks = [
            paragraph("x" * 40),
            ListBlock(ordered=True, items=items("1", "2", "3", "4", "5"), start=7),
        ]
        pages = paginate_blocks(blocks=blocks, config=lines_config(3), oracle=oracle)

        lists = [block for page in pages for block in page.blocks if isinstance(block, ListBlock)]
        assert [block.start for block in lists] == [7, 8, 11]
        assert [len(block.items) for block in lists] == [1, 3, 1]
        assert isinstance(pages[0].blocks[0], Generic)

    def test_numbers_are_contiguous(self, oracle):
        block = ListBlock(ordered=True, items=items(*[f"item {n}" for n in range(23)]), start=3)
        pages = paginate_blocks(blocks=[block], config=lines_config(4), oracle=oracle)

        numbers = [n for page in pages for sub in page.blocks for n in sub.numbers()]
        assert numbers == list(range(3, 26))

    def test_empty_items_dropped(self, oracle):
        block = ListBlock(ordered=False, items=items("a", "  ", "b"))
        pages = paginate_blocks(blocks=[block], config=lines_config(5), oracle=oracle)

        assert [item.text for item in _only(pages[0]).items] == ["a", "b"]

    def test_list_without_content_yields_no_page(self, oracle):
        block = ListBlock(ordered=False, items=items("", " "))
        assert paginate_blocks(blocks=[block], config=lines_config(5), oracle=oracle) == []

    def test_long_item_splits_by_paragraph(self, oracle):
        text = "\n\n".join(f"para {n}" for n in range(1, 6))
        block = ListBlock(ordered=True, items=(ListItem(text=text),), start=1)
        pages = paginate_blocks(blocks=[block], config=lines_config(3), oracle=oracle)

        assert len(pages) == 2
        first, second = _only(pages[0]), _only(pages[1])
        assert first.start == 1
        assert first.items[0].text == "para 1\n\npara 2\n\npara 3"
        assert second.start == 2
        assert second.items[0].text == "para 4\n\npara 5"

    def test_long_item_images_ride_with_first_fragment(self, oracle):
        image = ImageRef(src="cat.png", error="Image not found: cat.png")
        text = "\n\n".join(f"para {n}" for n in range(1, 6))
        block = ListBlock(ordered=True, items=(ListItem(text=text, images=(image,)),))
        pages = paginate_blocks(blocks=[block], config=lines_config(4), oracle=oracle)

        fragments = [_only(page).items[0] for page in pages]
        assert fragments[0].images == (image,)
        assert all(fragment.images == () for fragment in fragments[1:])

    def test_items_after_long_item_keep_numbering(self, oracle):
        long_text = "\n\n".join(f"para {n}" for n in range(1, 6))
        block = ListBlock(ordered=True, items=(ListItem("short"), ListItem(long_text), ListItem("tail")))
        pages = paginate_blocks(blocks=[block], config=lines_config(3), oracle=oracle)

        lists = [block for page in pages for block in page.blocks]
        assert lists[0].start == 1
        assert lists[0].items[0].text == "short"
        assert lists[-1].items[-1].text == "tail"
        assert lists[-1].start == 3

    def test_single_paragraph_item_splits_by_word(self, oracle):
        words = [f"w{n:02d}" for n in range(60)]
        after = paragraph("after")
        config = lines_config(2)
        blocks = [ListBlock(ordered=True, items=(ListItem(" ".join(words)),), start=1), after]
        pages = paginate_blocks(blocks=blocks, config=config, oracle=oracle)

        lists = [b for page in pages for b in page.blocks if isinstance(b, ListBlock)]
        assert len(lists) > 1
        assert all(len(b.items) == 1 for b in lists)
        assert [b.start for b in lists] == list(range(1, len(lists) + 1))
        assert [w for b in lists for w in split_words(b.items[0].text)] == words
        assert all(any_content(page.blocks) for page in pages)
        assert all(oracle.measure(page.blocks, config) <= config.max_content_height for page in pages)
        assert pages[-1].blocks[-1] == after

    def test_unbreakable_item_placed_alone(self, oracle):
        word = "x" * 500
        after = paragraph("after")
        blocks = [ListBlock(ordered=True, items=(ListItem(word),), start=4), after]
        pages = paginate_blocks(blocks=blocks, config=lines_config(2), oracle=oracle)

        assert len(pages) == 2
        first = _only(pages[0])
        assert first.start == 4
        assert [item.text for item in first.items] == [word]
        assert _only(pages[1]) == after

    def test_long_item_keeps_inline_markup(self, oracle):
        words = [f"w{n:02d}" for n in range(40)]
        item = ListItem(text=" ".join(words), markup=" ".join(f"<b>{w}</b>" for w in words))
        block = ListBlock(ordered=False, items=(item,))
        pages = paginate_blocks(blocks=[block], config=lines_config(2), oracle=oracle)

        fragments = [_only(page).items[0] for page in pages]
        assert len(fragments) > 1
        for fragment in fragments:
            expected = " ".join(f"<b>{w}</b>" for w in split_words(fragment.text))
            assert fragment.markup == expected


class TestCodeSplitting:
    """Line-granular code splitting."""

    def test_forty_lines_fifteen_per_page(self, oracle):
        code = "\n".join(f"line_{n} = {n}" for n in range(40))
        block = CodeBlock(language="python", code=code)
        pages = paginate_blocks(blocks=[block], config=lines_config(15), oracle=oracle)

        fragments = [_only(page) for page in pages]
        assert [len(f.code.split("\n")) for f in fragments] == [15, 15, 10]
        assert all(f.language == "python" for f in fragments)
        assert "\n".join(f.code for f in fragments) == code

    def test_small_block_kept_whole(self, oracle):
        block = CodeBlock(language="sh", code="echo a\n\necho b")
        pages = paginate_blocks(blocks=[block], config=lines_config(10), oracle=oracle)

        assert _only(pages[0]) == block

    def test_block_moves_to_fresh_page_when_it_fits_there(self, oracle):
        blocks = [paragraph("x" * 40), CodeBlock(language="", code="a\nb\nc")]
        pages = paginate_blocks(blocks=blocks, config=lines_config(3), oracle=oracle)

        assert len(pages) == 2
        assert _only(pages[1]) == blocks[1]

    def test_fragment_fills_partial_page(self, oracle):
        blocks = [paragraph("x" * 40), CodeBlock(language="go", code="1\n2\n3\n4\n5")]
        pages = paginate_blocks(blocks=blocks, config=lines_config(3), oracle=oracle)

        codes = [[b.code for b in page.blocks if isinstance(b, CodeBlock)] for page in pages]
        assert codes == [["1"], ["2\n3\n4"], ["5"]]

    def test_blank_lines_dropped_when_split(self, oracle):
        block = CodeBlock(language="", code="a\n\nb\n\nc\n\nd")
        pages = paginate_blocks(blocks=[block], config=lines_config(2), oracle=oracle)

        assert [_only(page).code for page in pages] == ["a\nb", "c\nd"]

    def test_line_taller_than_page_placed_alone(self, oracle):
        blocks = [paragraph("before"), CodeBlock(language="rust", code="a\nb\nc")]
        pages = paginate_blocks(blocks=blocks, config=lines_config(0), oracle=oracle)

        assert _only(pages[0]) == blocks[0]
        fragments = [_only(page) for page in pages[1:]]
        assert [f.code for f in fragments] == ["a", "b", "c"]
        assert all(f.language == "rust" for f in fragments)
        assert all(any_content(page.blocks) for page in pages)


class TestGenericPlacement:
    """Fit-or-flush placement and oversized content."""

    def test_blocks_share_page_until_full(self, oracle):
        blocks = [Heading(level=1, text="T"), paragraph("one"), paragraph("two"), paragraph("three")]
        pages = paginate_blocks(blocks=blocks, config=lines_config(3), oracle=oracle)

        assert [len(page.blocks) for page in pages] == [3, 1]

    def test_oversized_atom_placed_alone(self, oracle):
        heading = Heading(level=1, text="h" * 200)
        blocks = [paragraph("before"), heading, paragraph("after")]
        pages = paginate_blocks(blocks=blocks, config=lines_config(2), oracle=oracle)

        assert [page.blocks for page in pages] == [
            (blocks[0],),
            (heading,),
            (blocks[2],),
        ]

    def test_oversized_blockquote_not_split(self, oracle):
        quote = Generic(tag="blockquote", text=" ".join(["quoted"] * 50))
        pages = paginate_blocks(blocks=[quote], config=lines_config(2), oracle=oracle)

        assert _only(pages[0]) == quote

    def test_two_thousand_word_paragraph(self, oracle):
        words = [f"w{n:04d}" for n in range(2000)]
        block = paragraph(" ".join(words))
        pages = paginate_blocks(blocks=[block], config=lines_config(1), oracle=oracle)

        assert len(pages) > 100
        assert all(any_content(page.blocks) for page in pages)
        assert [w for page in pages for w in split_words(page.text())] == words

    def test_oversized_paragraph_continues_on_open_page(self, oracle):
        blocks = [paragraph(" ".join(["abcd"] * 10)), paragraph("next")]
        pages = paginate_blocks(blocks=blocks, config=lines_config(2), oracle=oracle)

        assert pages[-1].blocks[-1] == blocks[1]
        assert len(pages[-1].blocks) == 2

    def test_split_paragraph_keeps_inline_markup(self, oracle):
        words = [f"w{n:02d}" for n in range(30)]
        marked = {w: (f'<a href="https://example.test/{w}">{w}</a>' if n % 3 else f"<i>{w}</i>")
                  for n, w in enumerate(words)}
        block = Generic(tag="p", text=" ".join(words), markup=" ".join(marked[w] for w in words))
        pages = paginate_blocks(blocks=[block], config=lines_config(2), oracle=oracle)

        assert len(pages) > 1
        for page in pages:
            fragment = _only(page)
            assert fragment.markup == " ".join(marked[w] for w in split_words(fragment.text))


class TestSections:
    """Horizontal rules as section boundaries."""

    def test_rule_starts_new_page(self, oracle):
        blocks = [Heading(level=1, text="A"), paragraph("a"), Rule(), paragraph("b")]
        pages = paginate_blocks(
            blocks=blocks, config=lines_config(20), oracle=oracle, use_section_split=True
        )

        assert [page.blocks for page in pages] == [(blocks[0], blocks[1]), (blocks[3],)]

    def test_rule_ignored_without_section_split(self, oracle):
        blocks = [paragraph("a"), Rule(), paragraph("b")]
        pages = paginate_blocks(blocks=blocks, config=lines_config(20), oracle=oracle)

        assert [page.blocks for page in pages] == [(blocks[0], blocks[2])]

    def test_progress_advances_per_section(self, oracle):
        class Counter:
            total = 0

            def update(self, n=1):
                self.total += n

        counter = Counter()
        blocks = [paragraph("a"), Rule(), paragraph("b"), Rule(), paragraph("c")]
        paginate_blocks(
            blocks=blocks,
            config=lines_config(20),
            oracle=oracle,
            use_section_split=True,
            progress=counter,
        )
        assert counter.total == 3


class TestProperties:
    """Whole-run guarantees."""

    def test_no_empty_pages(self, oracle, sample_blocks):
        pages = paginate_blocks(
            blocks=sample_blocks, config=lines_config(3), oracle=oracle, use_section_split=True
        )

        assert pages
        assert all(any_content(page.blocks) for page in pages)

    def test_content_conserved(self, oracle, sample_blocks):
        pages = paginate_blocks(blocks=sample_blocks, config=lines_config(3), oracle=oracle)

        def words(text):
            return [w for w in text.split() if w]

        expected = [w for block in sample_blocks for w in words(block_text(block))]
        actual = [w for page in pages for block in page.blocks for w in words(block_text(block))]
        assert actual == expected

    def test_deterministic(self, oracle, sample_blocks):
        first = paginate_blocks(blocks=sample_blocks, config=lines_config(4), oracle=oracle)
        second = paginate_blocks(blocks=sample_blocks, config=lines_config(4), oracle=oracle)

        assert first == second

    def test_pages_fit_budget_unless_single_block(self, oracle, sample_blocks):
        config = lines_config(4)
        pages = paginate_blocks(blocks=sample_blocks, config=config, oracle=oracle)

        for page in pages:
            if len(page.blocks) > 1:
                assert oracle.measure(page.blocks, config) <= config.max_content_height

    def test_measurement_error_propagates(self, failing_oracle, sample_blocks):
        with pytest.raises(MeasurementError):
            paginate_blocks(blocks=sample_blocks, config=lines_config(3), oracle=failing_oracle)

    def test_empty_document(self, oracle):
        assert paginate_section(blocks=[], config=lines_config(3), oracle=oracle) == []
        assert paginate_blocks(blocks=[Rule()], config=lines_config(3), oracle=oracle) == []

