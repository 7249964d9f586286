import io
import json
import unittest
from contextlib import redirect_stdout
from unittest import mock

from scrypt_credentials.core.config import ScryptPolicy
from scrypt_credentials.core.credential_string import decode_credential
from scrypt_credentials.core.hashing import hash_password
from scrypt_credentials.scripts import credential_tool

FAST = ScryptPolicy(ln=4, r=8, p=1)


def _run(*argv):
    out = io.StringIO()
    with redirect_stdout(out):
        code = credential_tool.main(list(argv))
    return code, out.getvalue().strip()


class CredentialToolTests(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch.object(credential_tool, "get_policy", return_value=FAST)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_hash_uses_policy_and_overrides(self):
        code, text = _run("hash", "--password", "hunter2")
        self.assertEqual(code, 0)
        self.assertEqual(decode_credential(text).ln, 4)

        code, text = _run("hash", "--password", "hunter2", "--ln", "5", "--r", "2")
        params = decode_credential(text)
        self.assertEqual((params.ln, params.r, params.p), (5, 2, 1))

    def test_hash_rejects_empty_password_and_bad_costs(self):
        with self.assertRaises(SystemExit):
            _run("hash", "--password", "")
        with self.assertRaises(SystemExit):
            _run("hash", "--password", "hunter2", "--ln", "0")

    def test_verify_exit_codes(self):
        stored = hash_password("hunter2", policy=FAST)
        self.assertEqual(_run("verify", stored, "--password", "hunter2"), (0, "OK"))
        self.assertEqual(_run("verify", stored, "--password", "nope"), (1, "FAILED"))
        self.assertEqual(_run("verify", "garbage", "--password", "hunter2"), (1, "FAILED"))

    def test_inspect_reports_parameters_without_key(self):
        stored = hash_password("hunter2", policy=FAST)
        code, text = _run("inspect", stored)
        self.assertEqual(code, 0)
        payload = json.loads(text)
        self.assertEqual(payload["ln"], 4)
        self.assertEqual(payload["n"], 16)
        self.assertEqual(payload["key_bytes"], 32)
        self.assertNotIn(decode_credential(stored).hash, text)

    def test_inspect_rejects_garbage(self):
        with self.assertRaises(SystemExit):
            _run("inspect", "garbage")

    def test_needs_rehash(self):
        stored = hash_password("hunter2", policy=FAST)
        self.assertEqual(_run("needs-rehash", stored), (0, "no"))
        self.assertEqual(_run("needs-rehash", stored, "--ln", "6"), (1, "yes"))


if __name__ == "__main__":
    unittest.main()
