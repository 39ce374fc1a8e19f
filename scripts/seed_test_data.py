"""
Seed script to populate the database with users, swipes and matches for development.
Run with: python scripts/seed_test_data.py
"""

import asyncio
import random
import sys
from datetime import date, timedelta
from pathlib import Path

# Add parent directory to path so we can import app
sys.path.insert(0, str(Path(__file__).parent.parent))

from faker import Faker
from sqlalchemy import func, select

from app.core.security import hash_password
from app.database import async_session_maker
from app.models.match import Match
from app.models.swipe import Swipe
from app.models.user import User
from app.services.match_service import canonical_pair
from app.utils.age import years_before

fake = Faker()

# Configuration
NUM_USERS = 60
SWIPES_PER_USER = 15
LIKE_RATIO = 0.6
EMAIL_DOMAIN = "test.vemeet.dev"
TEST_PASSWORD = "Test1234!"


async def seed_users(db) -> list[User]:
    """Create users with a spread of genders, ages and preferences."""
    users = []
    password_hash = hash_password(TEST_PASSWORD)
    today = date.today()

    print(f"Creating {NUM_USERS} test users...")

    for i in range(NUM_USERS):
        gender = random.choice(["male", "female", "male", "female", "other"])
        if gender == "male":
            first_name = fake.first_name_male()
        elif gender == "female":
            first_name = fake.first_name_female()
        else:
            first_name = fake.first_name()

        age = random.randint(18, 55)
        min_age = max(18, age - random.randint(2, 10))
        max_age = min(99, age + random.randint(2, 12))

        user = User(
            email=f"user{i + 1}@{EMAIL_DOMAIN}",
            username=f"{first_name.lower()}{i + 1}",
            password_hash=password_hash,
            birthday=years_before(today, age) - timedelta(days=random.randint(1, 360)),
            gender=gender,
            seeking_gender=random.choice(["male", "female", "any"]),
            min_age_preference=min_age,
            max_age_preference=max_age,
            bio=fake.paragraph(nb_sentences=3) if random.choice([True, False]) else None,
            city=fake.city(),
            country=fake.country()[:100],
        )
        db.add(user)
        users.append(user)

    await db.flush()
    print(f"  Created {len(users)} users")
    return users


async def seed_swipes(db, users: list[User]) -> list[Swipe]:
    """Each user swipes on a random sample of the others."""
    swipes = []

    print("Creating swipes...")

    for user in users:
        others = [u for u in users if u.id != user.id]
        for target in random.sample(others, min(SWIPES_PER_USER, len(others))):
            decision = "LIKE" if random.random() < LIKE_RATIO else "PASS"
            swipe = Swipe(swiper_id=user.id, target_id=target.id, decision=decision)
            db.add(swipe)
            swipes.append(swipe)

    await db.flush()
    print(f"  Created {len(swipes)} swipes")
    return swipes


async def seed_matches(db, swipes: list[Swipe]) -> list[Match]:
    """Create a match for every pair that liked each other."""
    likes = {(s.swiper_id, s.target_id) for s in swipes if s.decision == "LIKE"}
    pairs = {canonical_pair(a, b) for a, b in likes if (b, a) in likes}

    print("Creating matches...")

    matches = [Match(user_a_id=a, user_b_id=b) for a, b in pairs]
    db.add_all(matches)

    await db.flush()
    print(f"  Created {len(matches)} matches")
    return matches


async def main():
    print("=" * 50)
    print("Seeding test data for VeMeet Backend")
    print("=" * 50)

    async with async_session_maker() as db:
        try:
            count_result = await db.execute(
                select(func.count(User.id)).where(User.email.like(f"%@{EMAIL_DOMAIN}"))
            )
            existing_count = count_result.scalar() or 0

            if existing_count > 0:
                print(f"\nFound {existing_count} existing test users.")
                print("Clear them first, emails and usernames are fixed. Aborted.")
                return

            print("\nCreating test data...")

            users = await seed_users(db)
            swipes = await seed_swipes(db, users)
            matches = await seed_matches(db, swipes)

            await db.commit()

            print("\n" + "=" * 50)
            print("Summary:")
            print("=" * 50)
            print(f"  Users created: {len(users)}")
            print(f"    - Male: {len([u for u in users if u.gender == 'male'])}")
            print(f"    - Female: {len([u for u in users if u.gender == 'female'])}")
            print(f"    - Other: {len([u for u in users if u.gender == 'other'])}")
            print(f"  Swipes created: {len(swipes)}")
            print(f"    - Likes: {len([s for s in swipes if s.decision == 'LIKE'])}")
            print(f"    - Passes: {len([s for s in swipes if s.decision == 'PASS'])}")
            print(f"  Matches created: {len(matches)}")
            print("\nTest user login:")
            print(f"  Email: user1@{EMAIL_DOMAIN}")
            print(f"  Password: {TEST_PASSWORD}")
            print("=" * 50)

        except Exception as e:
            print(f"\nError: {e}")
            await db.rollback()
            raise


if __name__ == "__main__":
    asyncio.run(main())
