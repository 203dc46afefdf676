import tinykrylov

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "myst_nb",
]

myst_enable_extensions = ["dollarmath", "colon_fence"]
master_doc = "index"
source_suffix = {
    ".rst": "restructuredtext",
    ".ipynb": "myst-nb",
}
templates_path = ["_templates"]

# General information about the project.
project = "tinykrylov"
copyright = "2026, tinykrylov developers"
version = tinykrylov.__version__
release = tinykrylov.__version__

exclude_patterns = ["_build"]
html_theme = "sphinx_book_theme"
html_title = "tinykrylov"
html_static_path = ["_static"]
html_show_sourcelink = False
nb_execution_mode = "auto"
nb_execution_timeout = -1

autodoc_type_aliases = {
    "JAXArray": "tinykrylov.helpers.JAXArray",
    "Operator": "tinykrylov.krylov.Operator",
}
