"""Database seeder for local development of the Social Raccoon API."""
import asyncio
import argparse
import random
import time

from social_api.database import engine, async_session, Base
from social_api.models import Comment, Post, Reaction
from social_api.schemas import ProfileCreate, UserCreate
from social_api.services import user_service

REACTION_TYPES = ["like", "love", "laugh", "wow", "sad"]
TOPICS = ["python", "fastapi", "raccoons", "campus life", "exams", "music", "football"]


async def seed(small: bool = False):
    num_users = 10 if small else 200
    num_posts_per_user = 3 if small else 10
    num_comments_per_post = 2 if small else 5

    print(f"Seeding: {num_users} users, ~{num_users * num_posts_per_user} posts")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        # Users go through the service so each gets a profile and placeholder image.
        users = []
        for i in range(num_users):
            user = await user_service.save_user(
                session,
                UserCreate(
                    username=f"user_{i:04d}",
                    email=f"user_{i:04d}@example.com",
                    name=f"User {i}",
                    profile=ProfileCreate(biography=f"I am test user number {i}."),
                ),
            )
            users.append(user)
        print(f"  Created {len(users)} users")

        posts = []
        for user in users:
            for _ in range(num_posts_per_user):
                post = Post(
                    content=f"Thoughts about {random.choice(TOPICS)} from {user.username}",
                    user_id=user.id,
                )
                session.add(post)
                posts.append(post)
        await session.flush()
        print(f"  Created {len(posts)} posts")

        total_comments = 0
        total_reactions = 0
        for post in posts:
            for _ in range(random.randint(1, num_comments_per_post)):
                author = random.choice(users)
                session.add(Comment(
                    comment=f"Nice post! Comment by {author.username}.",
                    user_id=author.id,
                    post_id=post.id,
                ))
                total_comments += 1
            # At most one reaction per (user, post).
            for reactor in random.sample(users, k=random.randint(0, min(5, len(users)))):
                session.add(Reaction(
                    user_id=reactor.id,
                    post_id=post.id,
                    reaction_type=random.choice(REACTION_TYPES),
                ))
                total_reactions += 1
        await session.flush()

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Posts: {len(posts)}")
    print(f"  Comments: {total_comments}")
    print(f"  Reactions: {total_reactions}")


def main():
    parser = argparse.ArgumentParser(description="Seed the Social Raccoon database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (10 users)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
