"""
Sample data for EduHub.

Run with `python -m eduhub.seed [--reset]`. Users, courses, enrollments
and reviews are created through the same service functions the API uses.
"""

import argparse
import logging
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from eduhub.core.database import SessionLocal, create_all_tables, drop_all_tables
from eduhub.models.course import Course
from eduhub.models.user import User, UserRole
from eduhub.schemas.course import CourseCreate
from eduhub.services import accounts, catalog, enrollment, reviews


logger = logging.getLogger(__name__)


SAMPLE_USERS: List[Dict[str, Any]] = [
    {
        "name": "Demo User",
        "email": "demo@eduhub.com",
        "password": "demo123",
        "role": UserRole.STUDENT.value,
    },
    {
        "name": "John Smith",
        "email": "john.smith@eduhub.com",
        "password": "instructor123",
        "role": UserRole.INSTRUCTOR.value,
        "bio": "Full-stack developer with 8+ years of experience. Passionate about teaching JavaScript and modern web development.",
    },
    {
        "name": "Admin User",
        "email": "admin@eduhub.com",
        "password": "admin123",
        "role": UserRole.ADMIN.value,
    },
]

SAMPLE_COURSES: List[Dict[str, Any]] = [
    {
        "title": "Complete JavaScript Mastery",
        "description": "Master JavaScript from basics to advanced concepts. Learn ES6+, async programming, DOM manipulation, and modern JavaScript frameworks. Perfect for beginners and intermediate developers.",
        "instructor": "John Smith",
        "category": "Programming",
        "level": "Intermediate",
        "price": 99.99,
        "thumbnail": "https://images.unsplash.com/photo-1513258496099-48168024aec0?w=600",
        "tags": ["javascript", "web development", "programming", "es6"],
        "duration": "8 weeks",
        "total_hours": 40,
        "prerequisites": ["Basic HTML", "Basic CSS"],
        "learning_objectives": [
            "Master JavaScript fundamentals and advanced concepts",
            "Build interactive web applications",
            "Understand asynchronous programming",
            "Work with modern JavaScript features",
        ],
        "lessons": [
            {
                "title": "Introduction to JavaScript",
                "content": "Learn the basics of JavaScript, variables, and data types.",
                "duration": 45,
                "order": 1,
            },
            {
                "title": "Functions and Scope",
                "content": "Understanding functions, scope, and closures in JavaScript.",
                "duration": 60,
                "order": 2,
            },
        ],
        "is_featured": True,
    },
    {
        "title": "React Development Bootcamp",
        "description": "Build modern web applications with React. Learn components, hooks, state management, routing, and deployment. Includes hands-on projects and real-world examples.",
        "instructor": "Sarah Johnson",
        "category": "Programming",
        "level": "Intermediate",
        "price": 149.99,
        "thumbnail": "https://images.unsplash.com/photo-1622295023876-0cdf583c41f6?w=600",
        "tags": ["react", "frontend", "javascript", "web development"],
        "duration": "10 weeks",
        "total_hours": 55,
        "prerequisites": ["JavaScript Fundamentals", "HTML/CSS"],
        "learning_objectives": [
            "Build React applications from scratch",
            "Master React hooks and state management",
            "Implement routing and navigation",
            "Deploy React applications",
        ],
        "is_featured": True,
    },
    {
        "title": "Python Data Science Fundamentals",
        "description": "Dive into data science with Python. Learn pandas, numpy, matplotlib, and scikit-learn. Analyze real datasets and build predictive models.",
        "instructor": "Dr. Michael Chen",
        "category": "Data Science",
        "level": "Beginner",
        "price": 199.99,
        "thumbnail": "https://images.unsplash.com/photo-1616587894289-86480e533129?w=600",
        "tags": ["python", "data science", "machine learning", "pandas"],
        "duration": "12 weeks",
        "total_hours": 60,
        "prerequisites": ["Basic Python knowledge"],
        "learning_objectives": [
            "Master Python data analysis libraries",
            "Visualize data effectively",
            "Build machine learning models",
            "Work with real-world datasets",
        ],
        "is_featured": True,
    },
    {
        "title": "UI/UX Design Principles",
        "description": "Learn the fundamentals of user interface and user experience design. Understand design thinking, wireframing, prototyping, and user testing methodologies.",
        "instructor": "Emma Wilson",
        "category": "Design",
        "level": "Beginner",
        "price": 129.99,
        "thumbnail": "https://images.unsplash.com/photo-1616587896649-79b16d8b173d?w=600",
        "tags": ["design", "ui", "ux", "prototyping"],
        "duration": "6 weeks",
        "total_hours": 30,
        "learning_objectives": [
            "Understand design principles",
            "Create user-centered designs",
            "Build wireframes and prototypes",
            "Conduct user research",
        ],
    },
    {
        "title": "Digital Marketing Mastery",
        "description": "Complete guide to digital marketing including SEO, social media marketing, email campaigns, and analytics. Learn to create effective marketing strategies.",
        "instructor": "David Rodriguez",
        "category": "Marketing",
        "level": "Intermediate",
        "price": 179.99,
        "thumbnail": "https://images.unsplash.com/photo-1588873281272-14886ba1f737?w=600",
        "tags": ["marketing", "seo", "social media", "analytics"],
        "duration": "8 weeks",
        "total_hours": 45,
    },
    {
        "title": "Node.js Backend Development",
        "description": "Build scalable backend applications with Node.js and Express. Learn database integration, API development, authentication, and deployment.",
        "instructor": "Alex Thompson",
        "category": "Programming",
        "level": "Advanced",
        "price": 169.99,
        "thumbnail": "https://images.unsplash.com/photo-1472220625704-91e1462799b2?w=600",
        "tags": ["nodejs", "backend", "express", "api"],
        "duration": "10 weeks",
        "total_hours": 50,
        "prerequisites": ["JavaScript", "Basic web development"],
    },
    {
        "title": "Machine Learning with TensorFlow",
        "description": "Advanced machine learning course using TensorFlow. Build neural networks, work with deep learning models, and deploy ML applications.",
        "instructor": "Dr. Lisa Zhang",
        "category": "Data Science",
        "level": "Advanced",
        "price": 299.99,
        "thumbnail": "https://images.unsplash.com/photo-1491975474562-1f4e30bc9468?w=600",
        "tags": ["machine learning", "tensorflow", "neural networks", "deep learning"],
        "duration": "16 weeks",
        "total_hours": 80,
        "prerequisites": ["Python", "Basic statistics", "Linear algebra"],
    },
    {
        "title": "Mobile App Development with React Native",
        "description": "Create cross-platform mobile apps with React Native. Learn navigation, state management, native modules, and app store deployment.",
        "instructor": "James Park",
        "category": "Programming",
        "level": "Intermediate",
        "price": 189.99,
        "thumbnail": "https://images.unsplash.com/photo-1488190211105-8b0e65b80b4e?w=600",
        "tags": ["react native", "mobile development", "ios", "android"],
        "duration": "12 weeks",
        "total_hours": 65,
    },
]

SAMPLE_REVIEWS = [
    # (course index, user index, rating, comment)
    (0, 0, 5, "Excellent course! Learned a lot about JavaScript."),
    (0, 1, 4, "Great content and examples. Would recommend!"),
    (1, 0, 5, "Best React course I've taken. Very comprehensive."),
]


def _get_or_create_user(db: Session, data: Dict[str, Any]) -> User:
    existing = accounts.get_user_by_email(db, data["email"])
    if existing:
        return existing
    profile = {k: v for k, v in data.items() if k not in ("name", "email", "password")}
    user, _ = accounts.signup(db, data["name"], data["email"], data["password"], **profile)
    return user


def seed(db: Session) -> Dict[str, int]:
    """Create the sample users, courses, enrollments and reviews."""
    if db.query(Course).count():
        logger.info("Courses already present, skipping (use --reset to start over)")
        return {"users": db.query(User).count(), "courses": db.query(Course).count()}

    users = [_get_or_create_user(db, data) for data in SAMPLE_USERS]
    instructors = [user for user in users if user.role == UserRole.INSTRUCTOR.value] or users[:1]
    logger.info(f"Created {len(users)} users")

    courses = [
        catalog.create_course(db, CourseCreate(**data), instructors[index % len(instructors)])
        for index, data in enumerate(SAMPLE_COURSES)
    ]
    logger.info(f"Created {len(courses)} courses")

    demo_user = users[0]
    for course in courses[:3]:
        enrollment.enroll(db, course, demo_user)
    enrollment.complete(db, courses[0], demo_user)
    logger.info(f"Demo user enrolled in {len(courses[:3])} courses")

    for course_index, user_index, rating, comment in SAMPLE_REVIEWS:
        course, user = courses[course_index], users[user_index]
        if not course.has_student(user.id):
            enrollment.enroll(db, course, user)
        reviews.add_or_replace_review(db, course, user, rating, comment)
    logger.info(f"Added {len(SAMPLE_REVIEWS)} sample reviews")

    return {"users": len(users), "courses": len(courses)}


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the EduHub database with sample data")
    parser.add_argument("--reset", action="store_true", help="drop all tables before seeding")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if args.reset:
        drop_all_tables()
    create_all_tables()

    db = SessionLocal()
    try:
        counts = seed(db)
    finally:
        db.close()

    logger.info(f"Seeding finished: {counts}")
    for data in SAMPLE_USERS:
        logger.info(f"{data['role']:<10} {data['email']} / {data['password']}")


if __name__ == "__main__":
    main()
