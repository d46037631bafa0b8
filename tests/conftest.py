"""Pytest configuration and shared fixtures."""

import json
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from ngmigration.analyzers.configuration import build_configuration
from ngmigration.models.migration import ScanConfiguration


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], Path]:
    """Return a helper that writes {relative path: content} under a root."""

    def _write(root: Path, files: dict[str, str]) -> Path:
        for rel_path, content in files.items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _write


@pytest.fixture
def config(temp_dir: Path) -> ScanConfiguration:
    """Default scan configuration rooted at temp_dir."""
    return build_configuration(temp_dir)


@pytest.fixture
def legacy_app(temp_dir: Path, write_tree) -> Path:
    """Create a small AngularJS 1.x application with typical anti-patterns."""
    return write_tree(temp_dir, {
        "package.json": json.dumps({
            "name": "phonecat",
            "dependencies": {"angular": "1.8.2", "angular-route": "1.8.2"},
        }, indent=2),
        "app/index.html": (
            "<!doctype html>\n"
            "<html ng-app=\"phonecatApp\">\n"
            "<head>\n"
            "  <script src=\"https://ajax.googleapis.com/ajax/libs/angularjs/1.8.2/angular.min.js\">"
            "</script>\n"
            "</head>\n"
            "<body><div ng-view></div></body>\n"
            "</html>\n"
        ),
        "app/app.module.js": (
            "// Define the phonecatApp module\n"
            "angular.module('phonecatApp', ['ngRoute']);\n"
        ),
        "app/phone-list.controller.js": (
            "angular.module('phonecatApp').controller('PhoneListCtrl', function($rootScope) {\n"
            "  $rootScope.title = 'Phones';\n"
            "});\n"
        ),
        "app/dialog.service.js": (
            "/* Builds dialogs at runtime */\n"
            "angular.module('phonecatApp').factory('dialog', function($compile) {\n"
            "  return function(scope) { return $compile('<div></div>')(scope); };\n"
            "});\n"
        ),
        "node_modules/angular/angular.js": (
            "$rootScope.$digest(); $compile(x); angular.module('m').controller('c', f);\n"
        ),
    })


@pytest.fixture
def ready_app(temp_dir: Path, write_tree) -> Path:
    """Create a TypeScript AngularJS application that passes the upgrade gate."""
    return write_tree(temp_dir, {
        "package.json": json.dumps({"dependencies": {"angular": "1.8.2"}}),
        "src/app.module.ts": "angular.module('app', ['ui.router']);\n",
        "src/hero.component.ts": (
            "angular.module('app').component('hero', {\n"
            "  template: '<h1>{{$ctrl.name}}</h1>',\n"
            "});\n"
        ),
        "src/hero.component.spec.ts": (
            "describe('hero', () => {\n"
            "  it('renders', () => {});\n"
            "});\n"
        ),
    })
