"""
Infrastructure Setup Script for Portfi Backend
This script checks the database connections and creates the tables.
"""

import logging

from sqlalchemy import func, select

from src.config import EXAMPLE_PORTFOLIO_HOLDER_IDS
from src.db.postgres_client import db
from src.db.redis_client import redis_client
from src.models import Portfolio

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def check_database_connections():
    """Check if all database connections are working."""
    logger.info("Checking database connections...")

    # Check PostgreSQL
    try:
        if db.ping():
            logger.info("✅ PostgreSQL connection: OK")
        else:
            logger.error("❌ PostgreSQL connection: Failed")
            return False
    except Exception as e:
        logger.error(f"❌ PostgreSQL connection error: {e}")
        return False

    # Redis only backs the GitHub cache, so the API still works without it
    try:
        redis_client.client.ping()
        logger.info("✅ Redis connection: OK")
    except Exception as e:
        logger.warning(f"⚠️ Redis connection error, GitHub cache disabled: {e}")

    return True


def check_data_availability():
    """Check if the example portfolios exist."""
    logger.info("Checking data availability...")

    try:
        with db.get_session() as session:
            portfolio_count = session.execute(select(func.count(Portfolio.id))).scalar_one()
            logger.info(f"📁 Portfolios in database: {portfolio_count}")

            example_count = session.execute(
                select(func.count(Portfolio.id)).where(Portfolio.person_id.in_(list(EXAMPLE_PORTFOLIO_HOLDER_IDS)))
            ).scalar_one()
            logger.info(f"⭐ Example portfolios: {example_count}")

            if example_count == 0:
                logger.warning("⚠️ No example portfolios found. Set EXAMPLE_PORTFOLIO_HOLDER_IDS.")
                return False

    except Exception as e:
        logger.error(f"Error checking data: {e}")
        return False

    return True


def main():
    """Main setup function."""
    logger.info("🚀 Setting up Portfi Backend...")

    if not check_database_connections():
        logger.error("❌ Database connection check failed!")
        return False

    db.create_tables()

    if not check_data_availability():
        logger.warning("⚠️ Data availability check failed!")
        return False

    logger.info("✅ Setup complete! Ready to start the server.")
    return True


if __name__ == "__main__":
    main()
