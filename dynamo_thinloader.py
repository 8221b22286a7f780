"""
Dynamo thin loader for viewops with module cache clearing.

Edits on disk are picked up between runs without restarting Revit.
Place this in a Dynamo Python Script node:

    IN[0]  operation name (e.g. "set_crop_box", "is_on_sheet")
    IN[1:] operation arguments (elements are unwrapped; Dynamo geometry is
           converted by entry_dynamo.run)
"""
import sys
import os
import traceback
import importlib

sys.dont_write_bytecode = True

# MUST be the repo root that contains viewops/
REPO_DIR = os.environ.get("VIEWOPS_PATH", r"C:\viewops")

package_dir = os.path.join(REPO_DIR, "viewops")
if not os.path.isdir(package_dir):
    OUT = {
        "error": "REPO_DIR does not contain the viewops package.",
        "REPO_DIR": REPO_DIR,
        "missing": [package_dir],
    }
else:
    while REPO_DIR in sys.path:
        sys.path.remove(REPO_DIR)
    sys.path.insert(0, REPO_DIR)

    try:
        # Purge only viewops modules; stdlib and Dynamo internals stay loaded
        for name in list(sys.modules.keys()):
            if name == "viewops" or name.startswith("viewops."):
                sys.modules.pop(name, None)

        entry = importlib.import_module("viewops.entry_dynamo")

        operation = IN[0]  # noqa: F821
        args = [UnwrapElement(a) for a in IN[1:]]  # noqa: F821

        session = entry.open_session()
        OUT = entry.run(session, operation, *args)

    except Exception as e:
        OUT = {
            "error": str(e),
            "traceback": traceback.format_exc(),
            "REPO_DIR": REPO_DIR,
            "sys_path_head": sys.path[:8],
            "entry_file": getattr(sys.modules.get("viewops.entry_dynamo", None), "__file__", None),
        }
