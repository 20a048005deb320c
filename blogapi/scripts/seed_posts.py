# blogapi/scripts/seed_posts.py
import asyncio
from typing import List, Optional

from blogapi.domain.inputs import PostCreateIn
from blogapi.core.exceptions import AppException
from blogapi.core.logger import logger
from blogapi.core.settings import settings
from blogapi.db.database import Database
from blogapi.db.models import Post
from blogapi.db.repository import PostRepository
from blogapi.services.posts import create_post

SAMPLE_POSTS = [
    {
        "title": "The Art of Clean Code Design: Principles Every Developer Should Know",
        "metaTitle": "Clean Code Design Principles - Best Practices for Developers",
        "metaDescription": "Learn essential clean code principles for writing readable, maintainable, and scalable code.",
        "content": (
            "<h2>Introduction to Clean Code</h2>"
            "<p>Clean code is not just about making your code work. It is about making it "
            "readable and easy to change for the next person who opens the file.</p>"
            "<h3>Meaningful Names</h3><p>Names should reveal intent.</p>"
            "<h3>Single Responsibility</h3><p>Each function and class should have one reason to change.</p>"
        ),
        "category": "Programming",
        "tags": ["clean-code", "best-practices", "software-development", "coding"],
        "status": "published",
    },
    {
        "title": "Modern JavaScript Best Practices: ES6+ Features You Should Master",
        "metaTitle": "Modern JavaScript ES6+ Features and Best Practices",
        "metaDescription": "Arrow functions, destructuring, async/await and other modern JavaScript features.",
        "content": (
            "<h2>Introduction to Modern JavaScript</h2>"
            "<p>With ES6 and beyond we have features that make code shorter and clearer.</p>"
            "<h3>Arrow Functions</h3><p>A concise syntax for function expressions.</p>"
            "<h3>Async/Await</h3><p>Asynchronous code that reads like synchronous code.</p>"
        ),
        "category": "JavaScript",
        "tags": ["javascript", "es6", "modern-js", "programming", "web-development"],
        "status": "published",
    },
    {
        "title": "Building Scalable React Applications: Architecture Patterns and Best Practices",
        "metaTitle": "Scalable React Architecture Patterns and Best Practices",
        "metaDescription": "Architecture patterns, state management and performance tips for large React apps.",
        "content": (
            "<h2>Introduction to React Architecture</h2>"
            "<p>As React applications grow, a solid architecture becomes crucial.</p>"
            "<ul><li><strong>Local State:</strong> component-specific data</li>"
            "<li><strong>Context API:</strong> shared state across components</li></ul>"
        ),
        "category": "React",
        "tags": ["react", "architecture", "scalability", "frontend", "javascript"],
        "status": "published",
    },
    {
        "title": "The Future of Web Development: Trends and Technologies to Watch",
        "metaTitle": "Web Development Trends and Technologies",
        "metaDescription": "AI-assisted development, WebAssembly, PWAs and edge computing.",
        "content": (
            "<h2>Web Development Trends</h2>"
            "<p>The web development landscape keeps changing. WebAssembly, progressive web "
            "apps and edge computing are shaping how we build and deploy applications.</p>"
        ),
        "category": "Web Development",
        "tags": ["web-development", "trends", "ai", "pwa", "performance"],
        "status": "published",
    },
    {
        "title": "Mastering CSS Grid and Flexbox: Modern Layout Techniques for Responsive Design",
        "metaTitle": "CSS Grid and Flexbox - Modern Layout Techniques",
        "metaDescription": "Responsive layouts with CSS Grid for pages and Flexbox for components.",
        "content": (
            "<h2>Modern CSS Layout</h2>"
            "<p>Use Grid for two-dimensional page layouts and Flexbox for one-dimensional "
            "component layouts. Combine both for responsive designs.</p>"
        ),
        "category": "CSS",
        "tags": ["css", "grid", "flexbox", "responsive-design", "layout", "frontend"],
        "status": "published",
    },
]


async def seed_posts(repo: PostRepository, samples: Optional[List[dict]] = None) -> List[Post]:
    """Borra todos los posts (incluidos los soft-deleted) e inserta los de ejemplo."""
    samples = SAMPLE_POSTS if samples is None else samples

    removed = await repo.delete_many()
    logger.info("Cleared %s existing posts", removed)

    created = []
    for sample in samples:
        post = await create_post(repo, PostCreateIn.model_validate(sample))
        created.append(post)

    logger.info("Inserted %s sample posts", len(created))
    return created


async def main() -> None:
    db = Database(settings.database_url, echo=settings.db_echo)
    db.connect()
    try:
        await db.create_all()
        await seed_posts(PostRepository(db, timeout=settings.db_timeout))
    except AppException as e:
        logger.error("Seeding failed: %s", e.message, exc_info=True)
        raise
    finally:
        await db.dispose()


if __name__ == "__main__":
    asyncio.run(main())
