
# setup.py
from setuptools import setup, find_packages

setup(
    name="chatdocs",
    version="0.1.0",
    description="A CLI tool that keeps project documentation in step with git history using a generative AI model.",
    author="Your Name or Team",
    author_email="your_email@example.com",
    packages=find_packages(include=['chatdocs', 'chatdocs.*']),

    include_package_data=True,
    # 提示词模板和默认的模型配置需要随包发布
    package_data={
        'chatdocs': ['templates/*.j2', 'configs/*.yaml'],
    },
    install_requires=[
        "click>=8.0",
        "pyyaml",
        "jinja2",
        "rich",
        "google-generativeai>=0.7",
        "google-api-core",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'chatdocs = chatdocs.cli:cli',
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Documentation",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
