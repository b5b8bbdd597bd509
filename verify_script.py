import sys
import argparse
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from vnengine.core.config import ConfigError, load_config
from vnframework.script import LoadError, ScriptLoader


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate a dialogue script before shipping it.")
    parser.add_argument("script", help="Script file (.json, .yaml, .yml or .script)")
    parser.add_argument("--config", default="assets/main.yaml", help="Engine config (YAML)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("ScriptVerification")

    try:
        config = load_config(Path(args.config))
        script = ScriptLoader(config).load_file(Path(args.script))
    except (ConfigError, LoadError) as e:
        logger.error(f"VERIFICATION FAILED: {e}")
        return 1

    for label in script.labels.labels():
        logger.info(f"  {label} -> entry {script.labels[label]}")

    branching = sum(1 for entry in script if entry.has_choices)
    logger.info(
        f"VERIFICATION SUCCESSFUL: {len(script)} entries, "
        f"{len(script.labels)} labels, {branching} branch points."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
