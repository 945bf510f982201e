"""
cloudhatch - Cloud Services UI Project Scaffolder
=================================================

A CLI tool that creates a new front-end application from the shared cloud
services UI template: it clones the template, fills in project metadata
and installs dependencies.

Features
--------
- **Template Fetch**: snapshot of the template's default branch, without
  git metadata
- **Placeholder Substitution**: ``{{application-name}}`` (and, for the
  extended variant, ``{{repo-name}}`` / ``{{application-name-camel}}``) in
  file contents, file names and directory names
- **Manifest Update**: package.json description set from the prompt
- **Dependency Setup**: install, peer dependencies and shared tooling upgrade

Quick Start
-----------
```bash
mkdir my-dashboard && cd my-dashboard
cloudhatch new
```

Architecture
------------
- ``cli``: Typer-based command line interface and prompts
- ``pipeline``: The scaffolding state machine
- ``fetcher``: Empty-directory check and template fetch
- ``instantiator``: Placeholder substitution over the template tree
- ``manifest``: package.json description update
- ``installer``: Package-manager steps
- ``executor``: External command execution
- ``models``: Pydantic models for project metadata and tool settings
- ``errors``: Exception hierarchy
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from cloudhatch.errors import ScaffoldError
from cloudhatch.instantiator import instantiate_template
from cloudhatch.models import ProjectConfig, ScaffoldSettings, TemplateVariant
from cloudhatch.pipeline import ScaffoldPipeline


__all__ = [
    "ProjectConfig",
    "ScaffoldError",
    "ScaffoldPipeline",
    "ScaffoldSettings",
    "TemplateVariant",
    "__version__",
    "instantiate_template",
]
