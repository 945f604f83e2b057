"""Simple entrypoint to run one specification extraction locally."""

import json
import sys

from fitcheck_app.app import OutfitSpecEngine

DEFAULT_REQUEST = "brown one-shoulder blouse and white capri pants"


def main() -> None:
    engine = OutfitSpecEngine()
    request = " ".join(sys.argv[1:]) or DEFAULT_REQUEST
    print(json.dumps(engine.extract_specification(request).to_dict(), indent=2))


if __name__ == "__main__":
    main()
