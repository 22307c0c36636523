import re
import unittest
import os
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from textsplitter.chunking import InvalidArgument, TextChunker, split_text


def normalize(text):
    return re.sub(r"\s+", " ", text).strip()


def make_prose(sentences=60):
    words = ["alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta"]
    parts = []
    for i in range(sentences):
        sentence = " ".join(words[(i + j) % len(words)] for j in range(5 + i % 7))
        parts.append(sentence.capitalize() + ("." if i % 3 else "!"))
        if i % 10 == 9:
            parts.append("\n\n")
        elif i % 4 == 3:
            parts.append("\n")
    return " ".join(parts)


class TestSplitText(unittest.TestCase):
    """Tests for the split_text function."""

    def test_short_text_is_single_chunk(self):
        self.assertEqual(split_text("hello world", 100), ["hello world"])

    def test_short_text_is_trimmed(self):
        self.assertEqual(split_text("  \n hello world \t\n", 100), ["hello world"])

    def test_empty_text(self):
        self.assertEqual(split_text("", 100), [])

    def test_whitespace_only_text(self):
        self.assertEqual(split_text(" \n\n\t ", 5), [])

    def test_exact_fit_is_single_chunk(self):
        self.assertEqual(split_text("abcde", 5), ["abcde"])

    def test_sentence_boundary_after_midpoint(self):
        text = "A. " + "x" * 40 + ". " + "y" * 40 + "."
        chunks = split_text(text, 50)
        self.assertEqual(chunks, ["A. " + "x" * 40 + ".", "y" * 40 + "."])

    def test_hard_cut_without_boundaries(self):
        chunks = split_text("a" * 10000, 3000)
        self.assertEqual([len(c) for c in chunks], [3000, 3000, 3000, 1000])

    def test_zero_size_fails(self):
        with self.assertRaises(InvalidArgument):
            split_text("some text", 0)

    def test_negative_size_fails(self):
        with self.assertRaises(InvalidArgument):
            split_text("some text", -10)

    def test_invalid_argument_is_value_error(self):
        with self.assertRaises(ValueError):
            split_text("", 0)

    def test_non_integer_size_fails(self):
        for bad in (2.5, "10", True, None):
            with self.subTest(size=bad):
                with self.assertRaises(InvalidArgument):
                    split_text("some text", bad)

    def test_paragraph_boundary_beats_later_space(self):
        # max 60: paragraph threshold is 20, the break sits at 25
        text = "a" * 25 + "\n\n" + "bbbb cccc dddd eeee ffff gggg hhhh iiii jjjj kkkk llll"
        chunks = split_text(text, 60)
        self.assertEqual(chunks[0], "a" * 25)
        self.assertEqual(chunks[1], "bbbb cccc dddd eeee ffff gggg hhhh iiii jjjj kkkk llll")

    def test_sentence_beats_later_space(self):
        text = "x" * 30 + ". " + "word " * 10
        chunks = split_text(text, 45)
        self.assertEqual(chunks[0], "x" * 30 + ".")

    def test_early_sentence_end_is_ignored(self):
        # the "." sits before the midpoint so the last space wins
        text = "Hi. " + "word " * 20
        chunks = split_text(text, 40)
        self.assertEqual(chunks[0], "Hi. word word word word word word word")

    def test_question_mark_is_a_sentence_end(self):
        text = "x" * 25 + "? " + "y" * 5 + " " + "z" * 30
        self.assertEqual(split_text(text, 45), ["x" * 25 + "?", "yyyyy " + "z" * 30])

    def test_exclamation_mark_is_a_sentence_end(self):
        text = "x" * 25 + "! " + "y" * 5 + " " + "z" * 30
        self.assertEqual(split_text(text, 45), ["x" * 25 + "!", "yyyyy " + "z" * 30])

    def test_early_paragraph_break_falls_through_to_space(self):
        # max 60: the blank line at 10 is not past 20, so the last space wins
        text = "a" * 10 + "\n\n" + "bbbb " * 12
        chunks = split_text(text, 60)
        self.assertEqual(chunks, ["a" * 10 + "\n\n" + " ".join(["bbbb"] * 9), "bbbb bbbb bbbb"])

    def test_early_newline_falls_through_to_hard_cut(self):
        text = "a" * 10 + "\n" + "c" * 60
        chunks = split_text(text, 40)
        self.assertEqual(chunks[0], "a" * 10 + "\n" + "c" * 29)
        self.assertEqual(chunks[1], "c" * 31)

    def test_sentence_end_at_threshold_is_rejected(self):
        text = "x" * 20 + "." + "y" * 30
        self.assertEqual(split_text(text, 40)[0], "x" * 20 + "." + "y" * 19)

    def test_newline_at_threshold_is_rejected(self):
        # max 63: line breaks must sit past offset 21
        self.assertEqual(split_text("a" * 21 + "\n" + "b" * 60, 63)[0], "a" * 21 + "\n" + "b" * 41)
        self.assertEqual(split_text("a" * 22 + "\n" + "b" * 60, 63)[0], "a" * 22)

    def test_space_at_threshold_is_rejected(self):
        text = "a" * 20 + " " + "b" * 30
        self.assertEqual(split_text(text, 40)[0], "a" * 20 + " " + "b" * 19)

    def test_line_boundary(self):
        text = "a" * 30 + "\n" + "b" * 40
        chunks = split_text(text, 50)
        self.assertEqual(chunks, ["a" * 30, "b" * 40])

    def test_early_space_falls_back_to_hard_cut(self):
        text = "ab " + "c" * 60
        chunks = split_text(text, 20)
        self.assertEqual(chunks[0], "ab " + "c" * 17)
        self.assertTrue(all(len(c) <= 20 for c in chunks))

    def test_multibyte_characters_are_never_split(self):
        text = "\u00e9" * 25 + "\U0001F600" * 25
        chunks = split_text(text, 10)
        self.assertEqual("".join(chunks), text)
        self.assertEqual(len(chunks), 5)

    def test_chunk_length_bound(self):
        text = make_prose()
        for size in (20, 37, 80, 150, 500):
            with self.subTest(size=size):
                for chunk in split_text(text, size):
                    self.assertLessEqual(len(chunk), size)
                    self.assertEqual(chunk, chunk.strip())
                    self.assertTrue(chunk)

    def test_deterministic(self):
        text = make_prose()
        self.assertEqual(split_text(text, 120), split_text(text, 120))

    def test_concatenation_preserves_text(self):
        text = make_prose()
        for size in (60, 120, 400):
            with self.subTest(size=size):
                chunks = split_text(text, size)
                self.assertGreater(len(chunks), 1)
                self.assertEqual(normalize(" ".join(chunks)), normalize(text))


class TestTextChunker(unittest.TestCase):
    """Tests for the TextChunker class."""

    def test_chunk_text_uses_configured_size(self):
        chunker = TextChunker(chunk_size=3000)
        self.assertEqual(len(chunker.chunk_text("a" * 7000)), 3)

    def test_invalid_size_rejected_at_construction(self):
        with self.assertRaises(InvalidArgument):
            TextChunker(chunk_size=0)

    def test_estimate_chunks(self):
        chunker = TextChunker(chunk_size=500)
        self.assertEqual(chunker.estimate_chunks(""), 0)
        self.assertEqual(chunker.estimate_chunks("a" * 500), 1)
        self.assertEqual(chunker.estimate_chunks("a" * 501), 2)


if __name__ == "__main__":
    unittest.main()
