import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import argparse

from src.presentation_assembly.config import load_settings
from src.presentation_assembly.placeholders import resolve_placeholders
from src.presentation_assembly.store import GoogleSlidesStore

parser = argparse.ArgumentParser(description="Show which shapes each slide's title and body resolve to")
parser.add_argument("presentation_id", help="Google Slides presentationId")
args = parser.parse_args()

store = GoogleSlidesStore.from_settings(load_settings())
pages = store.get_pages(args.presentation_id)
print(f"Found {len(pages)} slides")
if len(pages) < 3:
    print("Warning: templates need at least 3 slides (title, content layout, closing)")
for i, page in enumerate(pages):
    assignment = resolve_placeholders(page.elements)
    hints = ", ".join(f"{e.element_id}:{e.role_hint.value if e.role_hint else '-'}" for e in page.elements)
    print(f"{i:02d}. {page.page_id}  |  title={assignment.title_element_id}  body={assignment.body_element_id}")
    print(f"      elements: {hints or '(none)'}")
