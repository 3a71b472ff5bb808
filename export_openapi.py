import json
from pathlib import Path

from ip_intel.main import app  # FastAPI app


def main(out_path: Path = Path("openapi") / "openapi.generated.json") -> Path:
    schema = app.openapi()  # dict
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(schema, indent=2))
    print(f"Wrote {out_path}")  # noqa: T201
    return out_path


if __name__ == "__main__":
    main()
