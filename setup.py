from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="todo-app",
    version="1.0.0",
    description="Single-table todo application: FastAPI service, PostgreSQL store, proxy and client",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["todo_app", "todo_app.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "todo-app=todo_app.run:main",
            "todo-setup-db=todo_app.schema:main",
            "todo-client=todo_app.client.cli:main",
        ],
    },
)
