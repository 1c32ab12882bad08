import unittest
from pathlib import Path
import tempfile


from pr_bench.tools.io import read_json, write_json


class TestSafeIO(unittest.TestCase):
    def test_write_json_is_atomic_and_cleans_temp(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            out_dir = root / "out"
            out_path = out_dir / "receipt.json"

            payload = {"exit_code": 0, "skipped": False, "failed_step": None, "build": {"branch": "main"}}
            write_json(out_path, payload)

            # File written and readable
            self.assertTrue(out_path.exists())
            self.assertEqual(payload, read_json(out_path))

            # No temp files left behind on success
            tmp_files = list(out_dir.glob("*.tmp"))
            self.assertEqual([], tmp_files)


if __name__ == "__main__":
    unittest.main()
