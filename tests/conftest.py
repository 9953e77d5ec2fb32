import os

# Keep telelog's console sink out of test output.
os.environ.setdefault("MSCL_ENGINE_DISABLE_CONSOLE", "1")
