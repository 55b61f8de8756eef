#!/usr/bin/env python3
"""
Question Bank Loader: JSON → database

Reads a JSON question bank, validates every question and writes it to the
question_items table used by SqlQuestionRepository.

Usage:
    python scripts/load_question_bank.py --path=data/questions.json
    python scripts/load_question_bank.py --path=data/questions.json --reload
    python scripts/load_question_bank.py --path=data/questions.json --db-url=sqlite+aiosqlite:///quiz.db
"""

import argparse
import asyncio
from pathlib import Path

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from quizladder.assessment.ladder import LADDER
from quizladder.config import configure_logging, settings
from quizladder.core.models import Base, QuestionItem
from quizladder.storage import SqlQuestionRepository, load_question_bank


class QuestionBankLoader:
    """Loads a validated question bank into the database."""

    def __init__(self, db_url: str, bank_path: Path):
        self.db_url = db_url
        self.bank_path = bank_path
        self.engine = create_async_engine(db_url, echo=False)
        self.SessionLocal = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def create_tables(self) -> None:
        """Create all tables if they don't exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        print("✅ Database tables created/verified")

    async def truncate_questions(self) -> None:
        """Delete every stored question (for --reload)."""
        async with self.SessionLocal() as session:
            await session.execute(QuestionItem.__table__.delete())
            await session.commit()
        print("✅ Truncated question_items")

    async def load(self) -> int:
        """Validate the bank file and upsert its questions."""
        print(f"📖 Reading bank from: {self.bank_path}")
        questions, metadata = load_question_bank(self.bank_path)
        print(f"📊 Bank version: {metadata['version']}")
        print(f"📊 Questions: {len(questions)}")

        repository = SqlQuestionRepository(self.SessionLocal)
        return await repository.add_questions(questions)

    async def verify_load(self) -> dict[str, int]:
        """Count active questions per tier."""
        async with self.SessionLocal() as session:
            result = await session.execute(
                select(QuestionItem.tier, func.count())
                .where(QuestionItem.is_active.is_(True))
                .group_by(QuestionItem.tier)
            )
            counts = {tier: count for tier, count in result.all()}

        print("\n📊 Active questions per tier:")
        for tier in LADDER:
            count = counts.get(tier.value, 0)
            marker = "⚠️ " if count == 0 else "  "
            print(f"{marker}{tier.value:<10} {count}")

        return counts


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Load a JSON question bank into the database")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Delete existing questions before loading",
    )
    parser.add_argument(
        "--path",
        type=Path,
        help="Path to question bank JSON (default: QUESTION_BANK_PATH)",
    )
    parser.add_argument(
        "--db-url",
        type=str,
        help="Custom database URL (default from settings)",
    )
    args = parser.parse_args()
    configure_logging()

    db_url = args.db_url or settings.DATABASE_URL
    bank_path = args.path or settings.QUESTION_BANK_PATH
    if bank_path is None:
        parser.error("--path is required when QUESTION_BANK_PATH is not set")

    print("🚀 QuizLadder Question Bank Loader")
    print(f"📁 Bank: {bank_path}")
    print(f"🗄️  Database: {db_url.split('@')[1] if '@' in db_url else db_url}\n")

    loader = QuestionBankLoader(db_url, bank_path)

    try:
        await loader.create_tables()

        if args.reload:
            print("⚠️  RELOAD mode: Deleting existing questions...")
            await loader.truncate_questions()

        written = await loader.load()
        print(f"✅ Wrote {written} questions")

        await loader.verify_load()

        print("\n✅ Load complete!")

    except Exception as e:
        print(f"\n❌ Error: {e}")
        raise
    finally:
        await loader.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
