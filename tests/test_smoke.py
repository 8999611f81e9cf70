import importlib.util
import json
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from app.main import app


class SmokeTest(unittest.TestCase):
    def test_openapi_lists_stocks_route(self):
        c = TestClient(app)
        r = c.get('/openapi.json')
        self.assertEqual(r.status_code, 200)
        self.assertIn('/api/stocks', r.json()['paths'])

    def test_export_openapi_script_writes_document(self):
        repo_root = Path(__file__).resolve().parents[1]
        module_spec = importlib.util.spec_from_file_location(
            'export_openapi', repo_root / 'scripts' / 'export_openapi.py'
        )
        module = importlib.util.module_from_spec(module_spec)
        module_spec.loader.exec_module(module)

        with tempfile.TemporaryDirectory() as tmp:
            out_path = module.main(Path(tmp) / 'api')
            doc = json.loads(out_path.read_text(encoding='utf-8'))

        self.assertEqual(doc['info']['title'], 'Top Tech Chats')
        self.assertIn('/api/metrics/quote', doc['paths'])


if __name__ == '__main__':
    unittest.main()
