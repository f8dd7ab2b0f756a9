import unittest
from pathlib import Path

from readmedoc.core.errors import ConfigurationError
from readmedoc.core.options import Options, validate


class TestOptions(unittest.TestCase):

    def test_defaults(self):
        opts = validate()
        self.assertFalse(opts.fragment)
        self.assertEqual(opts.title, "README")
        self.assertIsNone(opts.out)
        self.assertIsNone(opts.head)

    def test_merges_over_defaults(self):
        opts = validate({"title": "beep boop", "fragment": True, "out": "x.html"})
        self.assertEqual(opts.title, "beep boop")
        self.assertTrue(opts.fragment)
        self.assertEqual(opts.out, "x.html")
        self.assertIsNone(opts.tests)

    def test_accepts_path_out(self):
        opts = validate({"out": Path("docs") / "x.html"})
        self.assertEqual(opts.out, Path("docs") / "x.html")

    def test_passes_options_instance_through(self):
        opts = Options(title="t")
        self.assertIs(validate(opts), opts)

    def test_rejects_non_object(self):
        for value in ("beep", 5, ["out"], True):
            with self.assertRaises(ConfigurationError):
                validate(value)

    def test_rejects_unknown_key(self):
        with self.assertRaises(ConfigurationError) as ctx:
            validate({"beep": "boop"})
        self.assertIn("beep", str(ctx.exception))

    def test_rejects_wrong_types(self):
        for options in ({"fragment": "yes"}, {"title": 5}, {"out": 1}, {"head": ["<style>"]}):
            with self.assertRaises(ConfigurationError):
                validate(options)

    def test_configuration_error_is_type_error(self):
        with self.assertRaises(TypeError):
            validate("beep")

    def test_options_are_immutable(self):
        opts = validate({"title": "a"})
        with self.assertRaises(Exception):
            opts.title = "b"


if __name__ == '__main__':
    unittest.main()
