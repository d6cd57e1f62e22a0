import unittest

from yamlsax.emit import (
    create_key_value,
    create_key_value_seq,
    create_sequence,
    dump,
    quote_scalar,
)
from yamlsax.errors import ParseFault, QuotingError
from yamlsax.handler import EventRecorder
from yamlsax.parser import YamlParser
from yamlsax.tree import loads


def _parse_events(text):
    recorder = EventRecorder()
    assert YamlParser(text, recorder).parse()
    return recorder.events


class TestCreateKeyValue(unittest.TestCase):
    def test_empty_value(self):
        self.assertEqual(create_key_value("key", ""), "key: \n")

    def test_plain_value(self):
        self.assertEqual(create_key_value("key", "value"), "key: value\n")

    def test_already_quoted_value_passes_through(self):
        self.assertEqual(create_key_value("key", '"value"'), 'key: "value"\n')
        self.assertEqual(create_key_value("key", "'value'"), "key: 'value'\n")

    def test_hash_is_single_quoted(self):
        self.assertEqual(create_key_value("key", "#"), "key: '#'\n")

    def test_single_quote_uses_double_quotes(self):
        self.assertEqual(create_key_value("key", "va'lue"), "key: \"va'lue\"\n")

    def test_double_quote_uses_single_quotes(self):
        self.assertEqual(create_key_value("key", 'va"lue'), "key: 'va\"lue'\n")

    def test_both_quote_characters_are_rejected(self):
        with self.assertRaises(QuotingError):
            create_key_value("key", "va'lu\"e")

    def test_values_that_would_not_survive_bare_are_quoted(self):
        self.assertEqual(quote_scalar("[x]"), "'[x]'")
        self.assertEqual(quote_scalar(" padded "), "' padded '")
        self.assertEqual(quote_scalar("x: y"), "x: y")

    def test_single_character_quote_is_not_treated_as_quoted(self):
        self.assertEqual(quote_scalar("'"), "\"'\"")
        self.assertEqual(quote_scalar('"'), "'\"'")


class TestCreateSequence(unittest.TestCase):
    def test_create_sequence(self):
        seq = []
        self.assertEqual(create_sequence(seq), "[]")
        seq.append("first")
        self.assertEqual(create_sequence(seq), "[first]")
        seq.append("second")
        self.assertEqual(create_sequence(seq), "[first, second]")

    def test_create_key_value_seq(self):
        iseq = []
        self.assertEqual(create_key_value_seq("key", iseq), "key: []\n")
        iseq.append(0)
        self.assertEqual(create_key_value_seq("key", iseq), "key: [0]\n")
        iseq.append(1)
        self.assertEqual(create_key_value_seq("key", iseq), "key: [0, 1]\n")

    def test_create_key_value_seq_formats_floats(self):
        self.assertEqual(create_key_value_seq("ratio", [0.5, 2]), "ratio: [0.5, 2]\n")


class TestRoundTrip(unittest.TestCase):
    VALUES = [
        "value",
        "#",
        "va'lue",
        'va"lue',
        "a # b",
        "[x]",
        " padded ",
        "R&B",
        "x: y",
        "- item",
        "'",
        '"',
        "John Williams",
    ]

    def test_key_value_round_trip(self):
        for value in self.VALUES:
            with self.subTest(value=value):
                events = _parse_events(create_key_value("key", value))
                self.assertEqual(
                    events,
                    [
                        ("start_document",),
                        ("start_mapping",),
                        ("key", "key"),
                        ("scalar", value),
                        ("end_mapping",),
                        ("end_document",),
                    ],
                )

    def test_empty_value_round_trips_as_null(self):
        events = _parse_events(create_key_value("key", ""))
        self.assertNotIn("scalar", [event[0] for event in events])
        self.assertIn(("key", "key"), events)

    def test_prequoted_value_parses_to_its_content(self):
        events = _parse_events(create_key_value("key", '"value"'))
        self.assertIn(("scalar", "value"), events)

    def test_double_quoted_value_ending_in_backslash_does_not_round_trip(self):
        value = "it's\\"
        self.assertEqual(quote_scalar(value), '"it\'s\\"')
        with self.assertRaises(ParseFault) as ctx:
            loads(create_key_value("key", value))
        self.assertEqual(ctx.exception.error.kind, "UnterminatedString")

    def test_key_value_seq_round_trip(self):
        events = _parse_events(create_key_value_seq("key", [0, 1]))
        self.assertEqual(
            events[2:7],
            [
                ("key", "key"),
                ("start_sequence",),
                ("scalar", "0"),
                ("scalar", "1"),
                ("end_sequence",),
            ],
        )


class TestDump(unittest.TestCase):
    def test_dump_layout(self):
        data = {"song": {"rating": 5, "moods": ["Happy", "Mellow"], "live": False}}
        self.assertEqual(
            dump(data),
            "song:\n"
            "  rating: 5\n"
            "  moods:\n"
            "    - Happy\n"
            "    - Mellow\n"
            "  live: false\n",
        )

    def test_dump_round_trip(self):
        data = {
            "song": {
                "rating": "5",
                "moods": ["Happy", "Mellow"],
                "note": "a # b",
                "empty": None,
                "tags": [],
                "people": [{"name": "a", "role": "b"}, "solo"],
            },
            "quote": "it's",
        }
        self.assertEqual(loads(dump(data)), data)

    def test_dump_sequence_root(self):
        self.assertEqual(dump(["a", ["b", "c"]]), "- a\n-\n  - b\n  - c\n")
        self.assertEqual(loads(dump(["a", ["b", "c"]])), ["a", ["b", "c"]])

    def test_dump_rejects_items_that_would_vanish(self):
        for data in ([None, "a"], [{}], {"tags": ["x", None]}):
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    dump(data)

    def test_dump_keeps_empty_string_items(self):
        self.assertEqual(dump(["", "a"]), "- ''\n- a\n")
        self.assertEqual(loads(dump(["", "a"])), ["", "a"])


if __name__ == "__main__":
    unittest.main()
