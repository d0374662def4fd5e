#!/usr/bin/env python3
"""
Auto Driver Installer - Main Entry Point
"""

import argparse
import sys

from autodriver import config
from autodriver.backend.pipeline import EXIT_FAILURE, EXIT_OK, DriverPipeline
from autodriver.backend.service_installer import ServiceInstaller
from autodriver.utils.logger import setup_logger
from autodriver.utils.prompts import prompt_yes_no


def show_banner():
    print(f"===== {config.APP_NAME} v{config.APP_VERSION} =====")
    print("Detects your graphics hardware and installs the recommended drivers.")
    print("If the installation fails, the default drivers are restored.")
    print()


def run_interactive(pipeline: DriverPipeline, ask=prompt_yes_no) -> int:
    """Confirm before installing, before rolling back and before rebooting"""
    show_banner()

    ctx = pipeline.initialize()
    if ctx is None:
        print("Cannot continue because of initialization errors.", file=sys.stderr)
        return EXIT_FAILURE

    print("\nDetected graphics devices:")
    for device in ctx.devices:
        print(f"- {device.full_name} [current driver: {device.current_driver}]")
    print()

    if not ask("Install the recommended drivers?"):
        print("Installation cancelled by user.")
        return EXIT_OK

    if not pipeline.install_drivers(ctx):
        print("\nThere were problems installing the drivers.")
        if ask("Restore the default drivers?"):
            pipeline.rollback(ctx)
            print("Default drivers restored.")
        return EXIT_FAILURE

    if not pipeline.verify():
        print("\nThe new drivers are not working, restoring the default drivers...")
        pipeline.rollback(ctx)
        return EXIT_FAILURE

    print("\nDriver installation completed successfully!")
    print("A reboot is recommended for all changes to take effect.")
    if ask("Reboot now?"):
        pipeline.system.run_tool(['reboot'])

    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=config.SCRIPT_NAME, description=config.APP_DESCRIPTION)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--auto', action='store_true',
                      help='run without prompts, roll back on any failure')
    mode.add_argument('--install-service', action='store_true',
                      help='install and enable a one-shot systemd service running --auto')
    parser.add_argument('--strict-backup', action='store_true',
                        help='abort before any change if the backup is incomplete')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug output on the console')
    parser.add_argument('--version', action='version', version=f"%(prog)s {config.APP_VERSION}")
    return parser


def main(argv=None):
    """Main application entry point"""
    args = build_parser().parse_args(argv)

    logger = setup_logger(level='DEBUG' if args.verbose else None)
    logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")

    try:
        if args.install_service:
            return EXIT_OK if ServiceInstaller().install() else EXIT_FAILURE

        pipeline = DriverPipeline(strict_backup=args.strict_backup)
        if args.auto:
            return pipeline.run_automatic()
        return run_interactive(pipeline)

    except KeyboardInterrupt:
        print()
        logger.info("Cancelled.")
        return EXIT_FAILURE
    except Exception:
        logger.exception("Driver installation aborted")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
