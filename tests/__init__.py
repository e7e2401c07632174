from pathlib import Path
import sys

# Make src/pump_sniper importable without an editable install
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
