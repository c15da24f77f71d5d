"""Point-cloud object extractor.

Assumptions:
- Each point-cloud file has a detections JSON file with the same stem.
- Detection positions sit at the base of their boxes.
"""
from pcd_object_extractor.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
