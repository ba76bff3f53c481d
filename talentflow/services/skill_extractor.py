"""Deterministic keyword-based skill extractor.

Finds known skills in free resume text by matching against a curated
vocabulary. No AI involved. Returns lowercase skill names, so the output
can go straight into a student's extracted_skills list.
"""

import re
from typing import List

# ---------------------------------------------------------------------------
# Curated skill vocabulary
# ---------------------------------------------------------------------------

SKILL_DATABASE: List[str] = [
    # --- Programming languages ---
    "javascript", "typescript", "python", "java", "c", "c++", "c#", "ruby", "go", "golang",
    "rust", "swift", "kotlin", "php", "perl", "scala", "r", "matlab", "dart", "lua",
    "objective-c", "shell", "bash", "powershell", "solidity", "haskell", "elixir", "clojure",
    # --- Web frontend ---
    "html", "html5", "css", "css3", "sass", "scss", "less", "tailwindcss", "tailwind",
    "bootstrap", "react", "reactjs", "react.js", "redux", "next.js", "nextjs",
    "vue", "vuejs", "vue.js", "nuxt", "nuxtjs", "angular", "angularjs", "svelte",
    "jquery", "webpack", "vite", "babel", "eslint", "prettier",
    # --- Web backend ---
    "node", "nodejs", "node.js", "express", "expressjs", "nestjs", "fastify",
    "django", "flask", "fastapi", "spring", "spring boot", "springboot",
    "rails", "ruby on rails", "laravel", "asp.net", ".net", "dotnet",
    # --- Databases ---
    "sql", "mysql", "postgresql", "postgres", "sqlite", "mongodb", "mongoose",
    "redis", "firebase", "firestore", "dynamodb", "cassandra", "couchdb",
    "mariadb", "oracle", "neo4j", "graphql", "prisma", "sequelize",
    # --- Cloud & DevOps ---
    "aws", "amazon web services", "azure", "gcp", "google cloud", "heroku",
    "docker", "kubernetes", "k8s", "terraform", "ansible", "jenkins",
    "ci/cd", "github actions", "gitlab ci", "circleci", "nginx", "apache",
    "linux", "unix", "devops", "cloudflare", "vercel", "netlify",
    # --- Data science & AI/ML ---
    "machine learning", "deep learning", "artificial intelligence", "ai", "ml",
    "nlp", "natural language processing", "computer vision", "opencv",
    "tensorflow", "pytorch", "keras", "scikit-learn", "sklearn", "pandas",
    "numpy", "scipy", "matplotlib", "seaborn", "jupyter", "data science",
    "data analysis", "data analytics", "data visualization", "tableau", "power bi",
    "big data", "hadoop", "spark", "apache spark", "etl", "data engineering",
    "statistics", "regression", "classification", "clustering", "neural networks",
    # --- Mobile ---
    "android", "ios", "react native", "flutter", "swiftui",
    "xamarin", "ionic", "cordova", "expo",
    # --- Tools & version control ---
    "git", "github", "gitlab", "bitbucket", "svn", "jira", "trello",
    "slack", "confluence", "figma", "sketch", "adobe xd", "postman",
    "swagger", "insomnia", "vs code", "vim",
    # --- Testing ---
    "jest", "mocha", "chai", "cypress", "selenium", "puppeteer", "playwright",
    "junit", "pytest", "testing", "unit testing", "integration testing",
    "test driven development", "tdd", "bdd",
    # --- Other ---
    "rest", "rest api", "restful", "api", "microservices", "websocket", "socket.io",
    "oauth", "jwt", "authentication", "authorization", "security",
    "agile", "scrum", "kanban", "project management",
    "blockchain", "web3", "ethereum", "smart contracts",
    "ux", "ui", "ux design", "ui design", "responsive design",
    "seo", "accessibility", "a11y", "performance", "optimization",
    "windows", "macos",
    "excel", "word", "powerpoint",
    "communication", "teamwork", "leadership", "problem solving",
]

# Longest first so "spring boot" is tried before "spring".
# A skill only counts when not glued to other letters: "go" must not hit "google".
_PATTERNS = [
    (skill, re.compile(r"(?:^|[^a-z])" + re.escape(skill) + r"(?:$|[^a-z])"))
    for skill in sorted(set(SKILL_DATABASE), key=lambda s: (-len(s), s))
]


def extract_skills_from_text(text: str) -> List[str]:
    """
    Return the known skills mentioned in *text*, lowercase, no duplicates.

    Order follows the vocabulary scan (longest skill names first).
    """
    if not text:
        return []

    lower_text = text.lower()
    return [skill for skill, pattern in _PATTERNS if pattern.search(lower_text)]
