from unittest import TestCase

from tracker.constants.group import INVITE_CODE_ALPHABET, INVITE_CODE_LENGTH
from tracker.utils.invite_code_utils import generate_invite_code, is_well_formed_invite_code, normalize_invite_code


class InviteCodeUtilsTests(TestCase):
    def test_generated_codes_are_well_formed(self):
        codes = [generate_invite_code() for _ in range(10000)]

        for code in codes:
            self.assertEqual(len(code), INVITE_CODE_LENGTH)
            self.assertTrue(set(code) <= set(INVITE_CODE_ALPHABET))
            self.assertTrue(is_well_formed_invite_code(code))

        # 36^6 possible codes; 10k draws colliding this often would mean a broken generator
        self.assertGreater(len(set(codes)), 9900)

    def test_normalize_invite_code(self):
        self.assertEqual(normalize_invite_code("  abc12z "), "ABC12Z")

    def test_is_well_formed_rejects_lowercase_and_wrong_length(self):
        self.assertFalse(is_well_formed_invite_code("abc123"))
        self.assertFalse(is_well_formed_invite_code("ABC12"))
        self.assertFalse(is_well_formed_invite_code("ABC-12"))
