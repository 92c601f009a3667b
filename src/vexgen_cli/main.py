import sys
import time
import logging

from .cli import parse_cmdline_args
from .config import VexConfig
from .exceptions import (
    VexGenError,
    ConfigurationError,
    ValidationError,
    FileSystemError,
    SBOMReadError,
    SBOMParseError,
    ProductURLParseError,
    SerializationError,
    HashingError,
    MergeError,
)
from .handlers import (
    handle_generate,
    handle_sbom,
)


def format_duration(duration_seconds: float) -> str:
    if duration_seconds < 60:
        return f"{duration_seconds:.1f} seconds"
    minutes, seconds = divmod(int(round(duration_seconds)), 60)
    return f"{minutes} minutes, {seconds} seconds"


def main(argv=None) -> int:
    """
    Main function to parse arguments, set up logging, build the run
    configuration and dispatch to the appropriate command handler.
    Returns an exit code (0 for success, non-zero for failure).
    """
    start_time = time.monotonic()
    exit_code = 1 # Default to failure
    logger = None

    try:
        params = parse_cmdline_args(argv)

        # Setup logging
        log_level = getattr(logging, params.log.upper(), logging.INFO)
        logging.basicConfig(level=log_level,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                            handlers=[logging.FileHandler("vexgen-cli-log.txt", mode='w')],
                            force=True)

        # Console output goes to stderr so stdout stays clean for the document
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        console_handler.setLevel(log_level)
        logging.getLogger().addHandler(console_handler)

        logger = logging.getLogger("vexgen-cli")
        logger.debug("Parsed parameters: %s", params)

        vex_config = VexConfig.from_params(params)
        logger.info("Distro: %s, author: %s (%s)", vex_config.distro, vex_config.author, vex_config.author_role)

        COMMAND_HANDLERS = {
            "generate": handle_generate,
            "sbom": handle_sbom,
        }

        handler = COMMAND_HANDLERS.get(params.command)
        if handler:
            handler(vex_config, params) # Handlers raise exceptions on failure
            exit_code = 0
        else:
            print(f"Error: Unknown command '{params.command}'.", file=sys.stderr)
            logger.error(f"Unknown command '{params.command}' encountered in main dispatch.")
            exit_code = 1

    # --- Unified Exception Handling ---
    except (ConfigurationError, ValidationError) as e:
        # User input problems, no traceback needed
        print(f"\nError: {e.message}", file=sys.stderr)
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=False)
        return 1
    except (FileSystemError, SBOMReadError, SBOMParseError, ProductURLParseError,
            SerializationError, HashingError, MergeError) as e:
        print(f"\nError: {e.message}", file=sys.stderr)
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=True)
        return 1
    except VexGenError as e:
        print(f"\nVEX Generator Error: {e.message}", file=sys.stderr)
        if logger: logger.error("Unhandled VexGenError: %s", e.message, exc_info=True)
        return 1
    except Exception as e:
        print(f"\nUnexpected Error: {e}", file=sys.stderr)
        if logger: logger.critical("Unexpected error occurred", exc_info=True)
        return 1
    finally:
        duration_str = format_duration(time.monotonic() - start_time)
        if logger: logger.info("Total execution time: %s", duration_str)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
