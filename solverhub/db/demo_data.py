"""
Built-in demo catalogue.

Used to seed an empty database and, only when `demo_mode` is on, served in
place of list reads that fail at the store. Ids are stable (uuid5) so the
same catalogue seeds and serves identically.
"""

import uuid
from datetime import datetime
from typing import List

from solverhub.schemas.schemas import Problem, Profile

_NAMESPACE = uuid.UUID("6f1c2d0e-8a4b-4c1e-9d53-2b7f0a9e4c11")


def demo_id(key: str) -> str:
    return str(uuid.uuid5(_NAMESPACE, key))


def demo_students() -> List[Profile]:
    return [
        Profile(
            id=demo_id("solver:john"),
            email="john.doe@example.com",
            name="John Doe",
            role="student",
            skills=["React", "TypeScript", "Node.js"],
            university="Stanford University",
            major="Computer Science",
            graduation_year="2024",
            experience_level="intermediate",
            bio="Full-stack developer with a passion for building user-friendly applications.",
            featured=True,
            created_at=datetime(2023, 1, 15),
            updated_at=datetime(2023, 6, 20),
        ),
        Profile(
            id=demo_id("solver:jane"),
            email="jane.smith@example.com",
            name="Jane Smith",
            role="student",
            skills=["UI/UX", "Figma", "Adobe XD"],
            university="MIT",
            major="Design",
            graduation_year="2023",
            experience_level="advanced",
            bio="UI/UX designer with 3+ years of experience creating beautiful interfaces.",
            featured=True,
            created_at=datetime(2023, 2, 10),
            updated_at=datetime(2023, 6, 15),
        ),
        Profile(
            id=demo_id("solver:alex"),
            email="alex.johnson@example.com",
            name="Alex Johnson",
            role="student",
            skills=["Python", "Machine Learning", "Data Analysis"],
            university="UC Berkeley",
            major="Data Science",
            graduation_year="2025",
            experience_level="beginner",
            bio="Data scientist specializing in machine learning and predictive analytics.",
            created_at=datetime(2023, 3, 5),
            updated_at=datetime(2023, 6, 10),
        ),
    ]


def demo_startups() -> List[Profile]:
    return [
        Profile(
            id=demo_id("startup:techwave"),
            email="info@techwave.com",
            name="TechWave Solutions",
            role="startup",
            company_name="TechWave Solutions",
            company_description="Building innovative AI solutions for enterprise customers.",
            sectors=["AI", "Enterprise Software", "SaaS"],
            stage="seed",
            hiring_status="hiring",
            location="San Francisco, CA",
            founder_names=["Alex Johnson", "Maria Garcia"],
            website_url="https://techwave.example.com",
            linkedin_url="https://linkedin.com/company/techwave",
            featured=True,
        ),
        Profile(
            id=demo_id("startup:greengrow"),
            email="contact@greengrow.com",
            name="GreenGrow",
            role="startup",
            company_name="GreenGrow",
            company_description="Sustainable agriculture technology solutions.",
            sectors=["AgTech", "Sustainability", "IoT"],
            stage="series-a",
            hiring_status="future_hiring",
            location="Boulder, CO",
            founder_names=["Sarah Chen", "Michael Rodriguez"],
            website_url="https://greengrow.example.com",
            linkedin_url="https://linkedin.com/company/greengrow",
        ),
    ]


def demo_problems() -> List[Problem]:
    techwave, greengrow = demo_startups()
    return [
        Problem(
            id=demo_id("problem:mobile-app"),
            title="Build a React Native Mobile App",
            description="We need a skilled developer to build a cross-platform mobile application for our startup.",
            startup_id=techwave.id,
            startup=techwave,
            required_skills=["React Native", "JavaScript", "Mobile Development"],
            experience_level="intermediate",
            compensation="$2000-$3000",
            additional_info="This is a 4-6 week project with potential for ongoing work.",
            status="open",
            featured=True,
        ),
        Problem(
            id=demo_id("problem:landing-page"),
            title="Design a New Product Landing Page",
            description="Looking for a UI/UX designer to create a compelling landing page for our new SaaS product.",
            startup_id=techwave.id,
            startup=techwave,
            required_skills=["UI/UX Design", "Figma", "Web Design"],
            experience_level="beginner",
            compensation="$500-$1000",
            additional_info="Should be completed within 2 weeks.",
            status="open",
            featured=False,
        ),
        Problem(
            id=demo_id("problem:ml-model"),
            title="Implement Machine Learning Model",
            description="We need help implementing a recommendation algorithm for our e-commerce platform.",
            startup_id=greengrow.id,
            startup=greengrow,
            required_skills=["Python", "Machine Learning", "Data Science"],
            experience_level="advanced",
            compensation="$3000-$4000",
            additional_info="This is a challenging project requiring strong ML skills.",
            status="open",
            featured=True,
        ),
    ]
