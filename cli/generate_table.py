from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from emojiseq.errors import GeneratorError
from emojiseq.generator import build_sequence_set, generate, write_artifact
from emojiseq.settings import GeneratorSettings
from emojiseq.telemetry.logging import configure_root_logging

_log = logging.getLogger("emojiseq.cli")


def _parse_args(argv: Optional[List[str]], settings: GeneratorSettings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compile Unicode emoji sequence files into the emojiseq table."
    )
    parser.add_argument("--sequences", default=str(settings.sequences_path))
    parser.add_argument("--zwj", default=str(settings.zwj_sequences_path))
    parser.add_argument("--output", default=str(settings.output_path))
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--plain-logs", action="store_true", default=not settings.log_json)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    settings = GeneratorSettings()
    args = _parse_args(argv, settings)
    configure_root_logging(args.log_level, json_lines=not args.plain_logs)

    try:
        generation = generate([args.sequences, args.zwj])
        # Inserting validates the whole table before anything is written.
        table = build_sequence_set(generation.records)
        path = write_artifact(args.output, generation)
    except (GeneratorError, OSError) as e:
        _log.error("table generation failed: %s", e)
        return 1

    print(
        f"Wrote {path}: {len(generation.records)} records, "
        f"{len(table)} sequences ({generation.version or 'no version'})"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
