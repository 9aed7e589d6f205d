import sys
from pathlib import Path

# Allow running the suite from a plain checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))
