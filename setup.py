from setuptools import setup, find_namespace_packages

setup(
    name="swapi_gallery",
    version="0.1",
    packages=find_namespace_packages(include=["app", "app.*", "gallery", "gallery.*", "models", "models.*"]),
    py_modules=["manual_gallery_test"],
    install_requires=[
        "uvicorn",
        "fastapi",
        "pydantic>=2",
        "httpx>=0.27.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires='>=3.11',
)
