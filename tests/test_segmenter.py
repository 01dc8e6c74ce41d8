"""Tests for slide boundary detection."""

from conftest import make_page

from services.narration.segmenter import DEFAULT_SLIDE_SELECTORS, SlideSegmenter
from shared.models import ElementCandidate, RenderedPage

LONG_A = "Quarterly revenue grew by twelve percent."
LONG_B = "Customer retention improved across all regions."


class TestSlideSegmenter:
    """Test cases for the SlideSegmenter class."""

    def test_filters_short_elements_and_reindexes(self):
        page = make_page({"section": ["x" * 25, "y" * 15, "z" * 100]})

        slides = SlideSegmenter().segment(page)

        assert [slide.index for slide in slides] == [0, 1]
        assert [len(slide.text) for slide in slides] == [25, 100]

    def test_highest_priority_selector_wins(self):
        page = make_page(
            {
                "section": [LONG_A],
                '[class*="slide"]': [LONG_A, LONG_B, LONG_B],
                "article": [LONG_B],
            }
        )

        slides = SlideSegmenter().segment(page)

        assert len(slides) == 1
        assert slides[0].text == LONG_A

    def test_falls_through_to_later_selector_when_earlier_is_empty(self):
        page = make_page({"section": [], ".swiper-slide": [LONG_A, LONG_B]})

        slides = SlideSegmenter().segment(page)

        assert [slide.text for slide in slides] == [LONG_A, LONG_B]

    def test_no_match_uses_whole_page(self):
        page = make_page(text=f"{LONG_A}\n{LONG_B}")

        slides = SlideSegmenter().segment(page)

        assert len(slides) == 1
        assert slides[0].index == 0
        assert slides[0].text == f"{LONG_A}\n{LONG_B}"

    def test_no_match_with_short_page_keeps_single_unfiltered_slide(self):
        page = make_page(text="Hi")

        slides = SlideSegmenter().segment(page)

        assert len(slides) == 1
        assert slides[0].text == "Hi"

    def test_no_match_with_empty_page_returns_empty_slide(self):
        slides = SlideSegmenter().segment(make_page(text=""))

        assert len(slides) == 1
        assert slides[0].text == ""

    def test_matches_all_filtered_returns_no_slides(self):
        page = make_page({"section": ["tiny", "   padded short   "]}, text=LONG_A)

        assert SlideSegmenter().segment(page) == []

    def test_whitespace_does_not_count_towards_length(self):
        padded = "   " + "a" * 20 + "   "
        page = make_page({"section": [padded, "b" * 21]})

        slides = SlideSegmenter().segment(page)

        assert [slide.text for slide in slides] == ["b" * 21]

    def test_candidates_ordered_by_document_index(self):
        page = RenderedPage(
            url="https://example.com",
            candidates={
                "section": [
                    ElementCandidate(index=2, text=LONG_B),
                    ElementCandidate(index=0, text=LONG_A),
                ]
            },
        )

        slides = SlideSegmenter().segment(page)

        assert [slide.text for slide in slides] == [LONG_A, LONG_B]

    def test_segmentation_is_idempotent(self):
        page = make_page({"article": [LONG_A, "short", LONG_B]})
        segmenter = SlideSegmenter()

        assert segmenter.segment(page) == segmenter.segment(page)

    def test_no_output_slide_is_decorative(self):
        texts = ["a" * n for n in range(0, 40, 3)]
        slides = SlideSegmenter().segment(make_page({"section": texts}))

        assert slides
        assert all(len(slide.text.strip()) > 20 for slide in slides)

    def test_custom_selectors(self):
        page = make_page({"div.deck-page": [LONG_A], "section": [LONG_B]})

        slides = SlideSegmenter(selectors=["div.deck-page"]).segment(page)

        assert [slide.text for slide in slides] == [LONG_A]

    def test_default_selector_priority(self):
        assert DEFAULT_SLIDE_SELECTORS[0] == "section"
        assert DEFAULT_SLIDE_SELECTORS[-1] == ".swiper-slide"
