from setuptools import setup, find_packages

setup(
    name="welcome-mailer",
    version="0.1.0",
    description="Welcome email service: form validation, template rendering and Resend/SendGrid delivery",
    author="",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={
        "welcome_mailer": ["templates/*.yaml", "templates/*.txt", "templates/*.html", "static/*"],
    },
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "Flask>=2.3.0",
        "MarkupSafe>=2.1.0",
        "sendgrid>=6.9.0",
        "python-dotenv>=0.19.0",
        "click>=8.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "requests>=2.28.0",
        "PyYAML>=5.4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "welcome-mailer=welcome_mailer.cli:main",
        ],
    },
)
