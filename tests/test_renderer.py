import random
import re
import unittest

from annotext.domain import Annotation, ContentUnit, Range
from annotext.exceptions import AnnotationReuseError, StackConsistencyError
from annotext.rendering.options import RenderConfig
from annotext.rendering.registry import AnnotationRegistry, default_registry
from annotext.rendering.renderer import (
    ContentRenderer,
    iter_markup,
    render,
    render_page,
    walk,
)

STRONG = '<span class="ve-ce-content-format-textStyle-strong">'
NEWLINE = '<span class="ve-ce-content-whitespace">&#182;</span>'
TAB = '<span class="ve-ce-content-whitespace">&#8702;</span>'


def bold():
    return Annotation("textStyle/bold")


def italic():
    return Annotation("textStyle/italic")


class TestPlainContent(unittest.TestCase):
    def test_empty_input(self):
        self.assertEqual(render([]), "")

    def test_plain_characters_are_escaped(self):
        self.assertEqual(render(list("a<b&'\"")), "a&lt;b&amp;&#039;&quot;")

    def test_whitespace_placeholders(self):
        self.assertEqual(render(list("a\tb\n")), "a" + TAB + "b" + NEWLINE)

    def test_plain_output_is_concatenated_escapes(self):
        text = "x > y\n"
        expected = "x &gt; y" + NEWLINE
        self.assertEqual(render(text), expected)
        self.assertNotIn("<b>", render(text))

    def test_whitespace_markers_disabled(self):
        config = RenderConfig(whitespace_markers=False)
        self.assertEqual(render(list("a\n\t"), config=config), "a\n\t")

    def test_extra_characters(self):
        config = RenderConfig(extra_characters={" ": "&nbsp;"})
        self.assertEqual(render(["a", " "], config=config), "a&nbsp;")

    def test_escaping_independent_of_annotations(self):
        a = bold()
        out = render([ContentUnit("<", (a,)), "<"])
        self.assertEqual(out, "<b>&lt;</b>&lt;")


class TestAnnotatedContent(unittest.TestCase):
    def test_single_span(self):
        a = bold()
        units = ["x", ContentUnit("y", (a,)), ContentUnit("z", (a,)), "w"]
        self.assertEqual(render(units), "x<b>yz</b>w")

    def test_overlap_reopens_buried_annotation(self):
        a, b = bold(), italic()
        units = [
            ContentUnit("x", (a,)),
            ContentUnit("y", (a, b)),
            ContentUnit("z", (b,)),
        ]
        self.assertEqual(render(units), "<b>x<i>y</i></b><i>z</i>")

    def test_trailing_open_annotations_close_innermost_first(self):
        a, b = bold(), italic()
        self.assertEqual(render([ContentUnit("x", (a, b))]), "<b><i>x</i></b>")

    def test_deep_buried_close(self):
        a, b = bold(), italic()
        c = Annotation("textStyle/strong")
        units = [
            ContentUnit("a", (a,)),
            ContentUnit("b", (a, b)),
            ContentUnit("c", (a, b, c)),
            ContentUnit("d", (b, c)),
        ]
        expected = (
            "<b>a<i>b" + STRONG + "c</span></i></b>"
            "<i>" + STRONG + "d</span></i>"
        )
        self.assertEqual(render(units), expected)

    def test_closes_follow_previous_unit_order(self):
        a, b = bold(), italic()
        units = [ContentUnit("x", (a, b)), "y"]
        # a is closed first while b is still innermost, so b is reopened
        # and then closed immediately.
        self.assertEqual(render(units), "<b><i>x</i></b><i></i>y")

    def test_structurally_equal_instances_are_distinct(self):
        first, second = bold(), bold()
        units = [ContentUnit("x", (first,)), ContentUnit("y", (second,))]
        self.assertEqual(render(units), "<b>x</b><b>y</b>")

    def test_instances_sharing_an_id_are_distinct(self):
        first, second = bold(), bold()
        object.__setattr__(second, "id", first.id)
        units = [ContentUnit("x", (first,)), ContentUnit("y", (second,))]
        self.assertEqual(render(units), "<b>x</b><b>y</b>")

    def test_shared_instance_spans_units(self):
        a = bold()
        units = [ContentUnit("x", (a,)), ContentUnit("y", (a,))]
        self.assertEqual(render(units), "<b>xy</b>")

    def test_unknown_type_contributes_no_markup(self):
        unknown = Annotation("comment/note", {"text": "hi"})
        self.assertEqual(render([ContentUnit("x", (unknown,))]), "x")

    def test_unknown_type_mixed_with_known(self):
        unknown, a = Annotation("comment/note"), bold()
        units = [
            ContentUnit("a", (unknown,)),
            ContentUnit("b", (unknown, a)),
            ContentUnit("c", (a,)),
        ]
        self.assertEqual(render(units), "a<b>bc</b>")

    def test_computed_link_markup(self):
        link = Annotation("link/external", {"href": 'http://x/?a="1"&b'})
        out = render([ContentUnit("x", (link,))])
        self.assertEqual(
            out,
            '<span class="ve-ce-content-format-link" '
            'data-href="http://x/?a=&quot;1&quot;&amp;b">x</span>',
        )

    def test_internal_link_and_object(self):
        link = Annotation("link/internal", {"title": "Main Page"})
        obj = Annotation("object/template", {"html": "<em>tpl</em>"})
        out = render([ContentUnit("x", (link,)), ContentUnit("y", (obj,))])
        self.assertEqual(
            out,
            '<span class="ve-ce-content-format-link" data-title="wiki/Main Page">x</span>'
            '<span class="ve-ce-content-format-object"><em>tpl</em>y</span>',
        )

    def test_custom_registry(self):
        registry = AnnotationRegistry()
        registry.register("x", "[", "]")
        registry.register("y", lambda data: "{" + data["n"], "}")
        a, b = Annotation("x"), Annotation("y", {"n": "1"})
        units = [ContentUnit("p", (a,)), ContentUnit("q", (a, b)), ContentUnit("r", (b,))]
        self.assertEqual(render(units, registry), "[p{1q}]{1r}")
        self.assertTrue(registry.frozen)


class TestStackErrors(unittest.TestCase):
    def test_reopened_instance_is_rejected(self):
        a = bold()
        units = [ContentUnit("x", (a,)), "y", ContentUnit("z", (a,))]
        with self.assertRaises(AnnotationReuseError) as ctx:
            render(units)
        self.assertIs(ctx.exception.annotation, a)
        self.assertEqual(ctx.exception.index, 2)

    def test_reuse_is_a_stack_consistency_error(self):
        a = bold()
        units = [ContentUnit("x", (a,)), "y", ContentUnit("z", (a,))]
        with self.assertRaises(StackConsistencyError):
            render(units)

    def test_missing_annotation_aborts_render(self):
        a = bold()

        class LateRegistry:
            """Knows bold only after the first lookup."""

            def __init__(self):
                self.calls = 0

            def lookup(self, type_):
                self.calls += 1
                if self.calls == 1:
                    return None
                return default_registry().lookup(type_)

        units = [ContentUnit("x", (a,)), "y"]
        with self.assertRaises(StackConsistencyError) as ctx:
            render(units, LateRegistry())
        self.assertIs(ctx.exception.annotation, a)

    def test_incremental_output_stops_at_error(self):
        a = bold()
        units = [ContentUnit("x", (a,)), "y", ContentUnit("z", (a,))]
        fragments = []
        with self.assertRaises(AnnotationReuseError):
            for frag in iter_markup(units):
                fragments.append(frag)
        self.assertEqual("".join(fragments), "<b>x</b>y")


class TestRanges(unittest.TestCase):
    def setUp(self):
        a, b = bold(), italic()
        self.units = [
            ContentUnit("x", (a,)),
            ContentUnit("y", (a, b)),
            ContentUnit("z", (b,)),
            "w",
        ]

    def test_range_normalize(self):
        self.assertEqual(Range().normalize(3), (0, 3))
        self.assertEqual(Range(5, 2).normalize(10), (2, 5))
        self.assertEqual(Range(-3, 100).normalize(4), (0, 4))

    def test_render_subrange(self):
        out = render(self.units, span=Range(1, 3))
        self.assertEqual(out, "<b><i>y</i></b><i>z</i>")

    def test_reversed_range(self):
        renderer = ContentRenderer()
        self.assertEqual(
            renderer.render_range(self.units, 3, 1),
            renderer.render_range(self.units, 1, 3),
        )

    def test_open_ended_range(self):
        self.assertEqual(render(self.units, span=Range(2)), "<i>z</i>w")


class TestIncremental(unittest.TestCase):
    def test_iter_markup_matches_render(self):
        a, b = bold(), italic()
        units = [ContentUnit("x", (a,)), ContentUnit("y", (a, b)), "z"]
        self.assertEqual("".join(iter_markup(units)), render(units))

    def test_walk_reports_transitions(self):
        a, b = bold(), italic()
        units = [ContentUnit("x", (a, b)), ContentUnit("y", (b,))]
        steps = list(walk(units))
        self.assertEqual(len(steps), 3)
        self.assertEqual(steps[0].opens, (a, b))
        self.assertEqual(steps[1].closes, (a,))
        self.assertEqual(steps[1].markup, "</i></b><i>")
        self.assertEqual(steps[2].char, "")
        self.assertEqual(steps[2].closes, (b,))
        self.assertEqual(steps[2].markup, "</i>")


class TestPage(unittest.TestCase):
    def test_render_page_wraps_fragment(self):
        frag = render([ContentUnit("x", (bold(),))])
        page = render_page(frag, title="Doc")
        self.assertTrue(page.startswith("<!doctype html>"))
        self.assertIn(frag, page)
        self.assertIn("ve-ce-content", page)
        self.assertIn("Doc", page)

    def test_content_renderer_page(self):
        renderer = ContentRenderer()
        page = renderer.render_page(renderer.render("ab"), title="Doc")
        self.assertIn("ab", page)
        self.assertIn("<title>Doc</title>", page)


_TAG = re.compile(r"<(/?)([a-z]+)>")


def _random_units(rng, length, kinds):
    """Units whose annotations each cover one contiguous interval."""
    spans = []
    for _ in range(rng.randint(0, 6)):
        start = rng.randrange(length)
        end = rng.randint(start + 1, length)
        spans.append((start, end, Annotation(rng.choice(kinds))))
    units = []
    for i in range(length):
        anns = [ann for s, e, ann in spans if s <= i < e]
        rng.shuffle(anns)
        units.append(ContentUnit(chr(ord("a") + i % 26), tuple(anns)))
    return units


class TestWellFormedness(unittest.TestCase):
    def test_random_overlaps_render_to_valid_trees(self):
        registry = AnnotationRegistry()
        for tag in ("b", "i", "u", "s"):
            registry.register(tag, f"<{tag}>", f"</{tag}>")
        rng = random.Random(1234)
        for _ in range(200):
            length = rng.randint(1, 12)
            units = _random_units(rng, length, ["b", "i", "u", "s"])
            out = render(units, registry)

            stack = []
            for closing, name in _TAG.findall(out):
                if closing:
                    self.assertTrue(stack, out)
                    self.assertEqual(stack.pop(), name, out)
                else:
                    stack.append(name)
            self.assertEqual(stack, [], out)
            self.assertEqual(_TAG.sub("", out), "".join(u.char for u in units))


if __name__ == "__main__":
    unittest.main()
