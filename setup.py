from setuptools import setup, find_packages

setup(
    name="x86_opcode_gen",
    version="0.1",
    packages=find_packages(exclude=["tests"]),
    install_requires=["tqdm"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "x86-opcode-gen = x86_opcode_gen.compare_corpus:main",
            "x86-opcode-gen-rewrite = x86_opcode_gen.corpus_tools:main",
        ],
    },
    description="x86-64 ModRM/SIB opcode text generator and known-opcode checker",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    license="MIT",
)
