#!/usr/bin/env python3

"""
Command-line interface for maintaining the event database.

Commands:
    init-db       Create the database schema
    list-events   Show a page of events with their confirmed registration count
    categories    Show the available event categories

Examples:
    python main.py init-db
    python main.py list-events --page 0 --size 10
    python main.py list-events --organizer 1f3a...
    python main.py categories
"""

import argparse
import logging
import sys
from typing import List, Optional

from eventhub.config.environment import IS_PRODUCTION_ENVIRONMENT
from eventhub.app import create_services
from eventhub.db import DatabaseError
from eventhub.services import ServiceError
from eventhub.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

def cmd_init_db(args, services) -> int:
    services.db.init_db()
    logger.info(f"Database ready ({'production' if IS_PRODUCTION_ENVIRONMENT else 'development'})")
    return 0

def cmd_list_events(args, services) -> int:
    if args.organizer:
        page = services.events.list_events_by_organizer(args.organizer, args.page, args.size)
    else:
        page = services.events.list_events(args.page, args.size)
    
    logger.info(f"Page {page.page + 1}/{max(page.total_pages, 1)} ({page.total} events)")
    for event in page.items:
        start = event.start_date_time.strftime('%Y-%m-%d %H:%M') if event.start_date_time else '-'
        logger.info(
            f"{event.id}  {start}  [{event.status.value}] {event.title} "
            f"({event.registered_count}/{event.capacity} confirmed)"
        )
    return 0

def cmd_categories(args, services) -> int:
    for name in services.events.list_categories():
        logger.info(name)
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Event database maintenance")
    parser.add_argument('--debug', action='store_true', help="Enable debug logging")
    subparsers = parser.add_subparsers(dest='command', required=True)
    
    init_parser = subparsers.add_parser('init-db', help="Create the database schema")
    init_parser.set_defaults(func=cmd_init_db)
    
    list_parser = subparsers.add_parser('list-events', help="List events")
    list_parser.add_argument('--page', type=int, default=0, help="Zero-based page number")
    list_parser.add_argument('--size', type=int, default=None, help="Page size")
    list_parser.add_argument('--organizer', help="Only list events of this organizer")
    list_parser.set_defaults(func=cmd_list_events)
    
    categories_parser = subparsers.add_parser('categories', help="List event categories")
    categories_parser.set_defaults(func=cmd_categories)
    
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    
    try:
        services = create_services()
        return args.func(args, services)
    except (ServiceError, DatabaseError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
