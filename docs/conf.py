import sys
import os

# to allow autodoc to discover the documented modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

project = 'Votesim'
copyright = '2026, Votesim developers'
author = 'Votesim developers'

with open(os.path.join(os.path.dirname(__file__), '..', 'VERSION')) as infile:
    release = infile.read().strip()

extensions = [
    'sphinx.ext.autodoc',
    'recommonmark',
]

source_suffix = {
    '.rst': 'restructuredtext',
    '.md': 'markdown',
}

autodoc_member_order = 'bysource'

templates_path = ['_templates']

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

html_theme = 'sphinxdoc'
