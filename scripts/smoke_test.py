"""Fulfillment Engine Smoke Test - Async Version"""

import asyncio
import sys
import traceback
from decimal import Decimal
from pathlib import Path
from typing import Tuple

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.application.dtos import FeeConfigurationRequest
from core.application.services import FeeConfigurationService
from core.data.uow import create_uow
from core.domain.enums import ActorRole, FeeCategory
from core.domain.value_objects import Actor
from core.infrastructure.database.config import close_database, create_session_factory, init_database


async def smoke_test() -> Tuple[bool, str]:
    """Run async smoke test against the configured database (DB_DATABASE_URL)."""
    try:
        print("=" * 80)
        print("FULFILLMENT ENGINE SMOKE TEST (ASYNC)")
        print("=" * 80)

        print("\n[1/4] Initializing database...")
        await init_database()
        session_factory = create_session_factory()
        print("Database initialized")

        print("\n[2/4] Opening a unit of work...")
        uow = create_uow(session_factory)
        async with uow:
            previous = await uow.fee_configurations.find_active(FeeCategory.COURIER)
        print(f"Unit of work {uow.execution_id} ok (current courier fee: "
              f"{previous.percent if previous else 'none'})")

        print("\n[3/4] Writing a fee configuration...")
        service = FeeConfigurationService(session_factory)
        admin = Actor(user_id=0, role=ActorRole.ADMIN)
        percent = previous.percent if previous else Decimal("10.00")
        await service.create_configuration(
            admin, FeeConfigurationRequest(category=FeeCategory.COURIER, percent=percent)
        )
        print(f"Courier fee set to {percent}%")

        print("\n[4/4] Reading it back...")
        rate = await service.get_active_rate(FeeCategory.COURIER)
        assert rate == percent, f"Expected {percent}, got {rate}"
        print("Active rate verified")

        print("\n" + "=" * 80)
        print("SMOKE TEST PASSED: System is healthy")
        print("=" * 80)

        return True, "All checks passed"

    except Exception as e:
        print("\n" + "=" * 80)
        print("SMOKE TEST FAILED")
        print("=" * 80)
        print(f"\nError: {e}")
        print("\nTraceback:")
        traceback.print_exc()
        return False, str(e)

    finally:
        await close_database()


async def main() -> int:
    """Main entry point."""
    success, _ = await smoke_test()
    return 0 if success else 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
