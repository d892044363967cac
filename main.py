# Main script: capture a page, package it, and save <hostname>-replica.zip
import argparse
import logging
import sys

from config_loader import load_config
from logger_setup import setup_logging
from replicator import generate_replica
from file_handler import build_archive, save_archive
from exceptions import ReplicaError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Save a web page with its images and stylesheets as an offline ZIP replica.")
    parser.add_argument("url", help="Address of the page to capture")
    parser.add_argument("--config", default=None, help="Path to a JSON config file")
    parser.add_argument("--output-dir", default=None, help="Directory for the archive (overrides config)")
    return parser.parse_args(argv)


# --- Main Execution ---
def main(argv=None):
    """Runs one capture. Returns the process exit code."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: Could not load configuration: {e}", file=sys.stderr)
        return 1
    if args.output_dir:
        config['output_dir'] = args.output_dir

    setup_logging(config['log_file'], config['log_level'])
    logging.info("--- Starting Website Replicator ---")

    try:
        result = generate_replica(args.url, config)
    except ReplicaError as e:
        logging.error(f"Error: {e}")
        return 1

    archive_bytes = build_archive(result)
    try:
        saved_path = save_archive(archive_bytes, result.page_url, config['output_dir'])
    except OSError as e:
        logging.error(f"Error writing archive for {result.page_url}: {e}")
        return 1

    logging.info("--- Capture Summary ---")
    logging.info(f"Images: {result.counts.images}")
    logging.info(f"Stylesheets: {result.counts.stylesheets}")
    logging.info(f"Total size: {result.total_kilobytes} KB")
    print(saved_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
