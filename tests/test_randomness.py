import os
import unittest
from unittest import mock

from quiztool.util.randomness import make_rng, seed_from_env


class RandomnessTests(unittest.TestCase):
    def test_seed_env_drives_private_rng(self) -> None:
        with mock.patch.dict(os.environ, {"SEED": "42"}):
            self.assertEqual(seed_from_env(), 42)
            r1, r2 = make_rng(), make_rng()
            a = [r1.random() for _ in range(3)]
            b = [r2.random() for _ in range(3)]
        self.assertEqual(a, b)

    def test_invalid_seed_is_ignored(self) -> None:
        with mock.patch.dict(os.environ, {"SEED": "abc"}):
            self.assertIsNone(seed_from_env())

    def test_explicit_seed_wins(self) -> None:
        with mock.patch.dict(os.environ, {"SEED": "1"}):
            self.assertEqual(make_rng(7).random(), make_rng(7).random())
            self.assertNotEqual(make_rng(7).random(), make_rng().random())


if __name__ == "__main__":
    unittest.main()
