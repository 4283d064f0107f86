import argparse
import logging
import sys

import psycopg2

from . import config
from .db import Database
from .menu import Session, greeting, main_menu

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="hotel-cli",
        description="Menu-driven client for the hotel reservation database"
    )
    parser.add_argument("dbname", nargs="?", help="database name")
    parser.add_argument("port", nargs="?", help="database port")
    parser.add_argument("user", nargs="?", help="database user")
    parser.add_argument("--password", help="database password")
    parser.add_argument("--host", help="database host")
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        help="logging level (DEBUG, INFO, WARNING, ...)")
    return parser.parse_args(argv)


def connect(args):
    db_config = config.load_db_config(
        dbname=args.dbname,
        port=args.port,
        user=args.user,
        password=args.password,
        host=args.host,
    )
    print("Connecting to database...")
    print(f"Connection URL: postgresql://{db_config['host']}:{db_config['port']}/{db_config['dbname']}\n")
    db = Database.from_config(db_config)
    print("Done")
    return db


def main(argv=None, read_line=input):
    args = parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="[%(levelname)s] %(message)s"
    )

    try:
        db = connect(args)
    except psycopg2.OperationalError as e:
        print(f"Error - Unable to Connect to Database: {e}", file=sys.stderr)
        print("Make sure you started postgres on this machine")
        return 1

    session = Session(db, read_line=read_line)
    greeting(session)
    try:
        main_menu(session)
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        print("Disconnecting from database...", end="")
        db.cleanup()
        print("Done\n\nBye !")
    return 0


if __name__ == "__main__":
    sys.exit(main())
