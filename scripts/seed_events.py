#!/usr/bin/env python3
"""Script to seed the configured storage backend with a demo event."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import settings
from src.core.logging import configure_logging
from src.services.participation import ParticipationService
from src.storage import get_storage


async def seed(creator: str, name: str, max_attendees: int | None) -> None:
    """Create one demo event and print its claim link."""
    storage = get_storage()
    print(f"Using {storage.name} storage ({settings.app_env})")

    if not await storage.health_check():
        print("Storage backend is not reachable")
        sys.exit(1)

    service = ParticipationService(storage=storage)
    event = await service.create_event(
        name=name,
        description=f"Demo event created by {creator}",
        date="2024-05-01T18:00:00+00:00",
        creator=creator,
        token_mint_address=f"demo-mint-{creator}",
        max_attendees=max_attendees,
    )

    print(f"Created event {event.id}: {event.name}")
    print(f"  - QR code data: {event.qr_code_data}")
    print(f"  - Claim URL: {service.claim_url(event)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a demo event")
    parser.add_argument("--creator", default="DemoCreatorWallet", help="Creator wallet address")
    parser.add_argument("--name", default="Hack Night", help="Event name")
    parser.add_argument("--max-attendees", type=int, default=None, help="Attendee cap")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(seed(args.creator, args.name, args.max_attendees))


if __name__ == "__main__":
    main()
