from setuptools import setup, find_packages

setup(
    name="suffix_tree_package",
    version="0.1.0",
    description="Online (Ukkonen) suffix tree construction with substring and suffix queries",
    packages=find_packages(where='.', include=['suffix_tree_package', 'suffix_tree_package.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.19.0'
    ],
    extras_require={
        'test': ['pytest'],
        # display_graphviz() only
        'graphviz': ['graphviz'],
        # benchmark.py only
        'benchmark': ['pandas', 'matplotlib', 'seaborn'],
    },
    zip_safe=False
)
