"""
PLY点云加载器安装脚本
PLY Point Cloud Loader Setup
"""

from setuptools import setup, find_packages
from pathlib import Path

# 读取README
readme_file = Path(__file__).parent / "README.md"
if readme_file.exists():
    with open(readme_file, "r", encoding="utf-8") as fh:
        long_description = fh.read()
else:
    long_description = "二进制PLY点云加载器：位置与颜色缓冲区"

setup(
    name="ply_point_cloud_loader",
    version="1.0.0",
    author="3D Reconstruction Team",
    description="二进制PLY点云加载器，输出位置与颜色缓冲区供渲染使用",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config", "main"],
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Scientific/Engineering :: Visualization",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19.0",
        "scipy>=1.7.0",
    ],
    extras_require={
        "visualization": ["open3d>=0.13.0"],
        "dev": [
            "pytest>=6.0.0",
        ],
        "full": [
            "open3d>=0.13.0",
            "pytest>=6.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "plyload=main:main",
        ],
    },
    include_package_data=True,
    package_data={
        "": ["*.json", "*.md"],
    },
    keywords="point-cloud ply loader 3d-reconstruction rendering",
)
