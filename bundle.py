import os
import re
from pathlib import Path
from rjsmin import jsmin

STATIC_DIR: str = "static"
JS_DIR: str = "js"
BUNDLE_NAME: str = os.path.join("dist", "app.bundle.js")

# scripts that others depend on; everything else follows in directory order
DO_FIRST: list[str] = [
  "010-http.js",
  "020-gallery.js",
]

BUNDLE_TAG = """<script src="/js/dist/app.bundle.js" defer type="application/javascript"></script>"""


def read_file(path) -> str:
  with open(path, "r", encoding="utf-8") as f:
    return f.read()


def walk_directory(bundle_content: dict[str,str], path: str, ignore: list[str]):
  if path in ignore:
    print(f"Ignoring {path}")
    return

  if os.path.isfile(path):
    raise Exception(f"Tried to walk a file ({path})")

  for file_or_dir in sorted(os.listdir(path)):
    full_path = os.path.join(path, file_or_dir)
    if os.path.isdir(full_path):
      walk_directory(bundle_content, full_path, ignore)
    elif full_path.endswith(".js") and full_path not in bundle_content:
      bundle_content[full_path] = read_file(full_path)


def save_bundle(bundle_content: dict[str,str], bundle_path: str):
  mini_parts = []
  for filename, content in bundle_content.items():
    print(f"Bundling {filename}")
    mini = jsmin(content)
    mini_parts.append(f"// {os.path.basename(filename)}\n{mini}")
  as_text = "\n\n".join(mini_parts)
  Path(bundle_path).parent.mkdir(parents=True, exist_ok=True)
  with open(bundle_path, "w", encoding="utf-8") as f:
    f.write(as_text)


def make_prod_index(html: str) -> str:
  # replace individual JS imports with the bundle
  html = re.sub(
    r"<!--Debug imports start.*?Debug imports end-->",
    BUNDLE_TAG,
    html, flags = re.S)

  # delete commented-out HTML
  return re.sub(r" *<!--.*?-->[\r\n]*", "", html, flags = re.S)


def prepare_prod_index(static_dir: str):
  print("Making production index.html")
  html = read_file(os.path.join(static_dir, "dev-index.html"))
  with open(os.path.join(static_dir, "index.html"), "w", encoding="utf-8") as f:
    f.write(make_prod_index(html))


def bundle(static_dir: str = STATIC_DIR):
  js_root = os.path.join(static_dir, JS_DIR)
  bundle_path = os.path.join(js_root, BUNDLE_NAME)
  bundle_content = {}
  for filename in DO_FIRST:
    path = os.path.join(js_root, filename)
    bundle_content[path] = read_file(path)

  walk_directory(bundle_content, js_root, [os.path.dirname(bundle_path)])

  save_bundle(bundle_content, bundle_path)

  prepare_prod_index(static_dir)


if __name__ == "__main__":
  bundle()
