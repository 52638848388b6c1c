"""HTML test page template for rendering-library test scripts.

The page loads the library from a CDN, records ``window.testIsolation`` with the
test name, seed and start time, and (when auto-executing) runs the user script
on ``load``, filling in ``end_time``, ``duration``, ``success`` and ``error``.
The script is embedded verbatim; nothing is fetched or validated here.
"""

from __future__ import annotations

import json
from string import Template
from typing import Optional

from ..core.constants import DEFAULT_LIBRARY_VERSION
from ..utils.exceptions import ValidationError

LIBRARY_CDN_URL = "https://cdnjs.cloudflare.com/ajax/libs/three.js/${version}/three.min.js"
CANVAS_ELEMENT_ID = "three-canvas"

_PAGE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>${title}</title>
  <style>
    body { margin: 0; padding: 0; overflow: hidden; background: #000; }
    canvas { display: block; width: 100vw; height: 100vh; }
  </style>
</head>
<body>
  <canvas id="${canvas_id}"></canvas>
  <script src="${library_url}"></script>
  <script>
    window.testIsolation = {
      test_name: ${test_name},
      seed: ${seed},
      start_time: performance.now()
    };

    function ensureWebGLContext() {
      const canvas = document.getElementById('${canvas_id}');
      const gl = canvas.getContext('webgl') || canvas.getContext('experimental-webgl');
      if (!gl) {
        throw new Error('WebGL not supported');
      }
      return gl;
    }

    function ensureThreeJS() {
      if (typeof THREE === 'undefined') {
        throw new Error('THREE.js not loaded');
      }
      return THREE;
    }
${body}
  </script>
</body>
</html>
"""
)

_AUTO_EXECUTE = Template(
    """
    window.addEventListener('load', function() {
      try {
${webgl_check}        ensureThreeJS();
        (${script})();
        window.testIsolation.end_time = performance.now();
        window.testIsolation.duration = window.testIsolation.end_time - window.testIsolation.start_time;
        window.testIsolation.success = true;
      } catch (error) {
        window.testIsolation.error = error.message;
        window.testIsolation.success = false;
        console.error('Test execution error:', error);
      }
    });
"""
)

_MANUAL_EXECUTE = Template(
    """
    window.userScript = ${script};
"""
)


def generate_test_html(
    script: str,
    *,
    test_name: str,
    seed: int,
    title: Optional[str] = None,
    library_version: str = DEFAULT_LIBRARY_VERSION,
    auto_execute: bool = True,
    enable_webgl: bool = True,
) -> str:
    """Render the test page for ``script``.

    Args:
        script: JavaScript function source, embedded verbatim.
        test_name: Recorded as ``window.testIsolation.test_name``.
        seed: Recorded as ``window.testIsolation.seed``.
        title: Page title; defaults to ``"Three.js Test - <test_name>"``.
        library_version: CDN release of the rendering library, e.g. ``"r128"``.
        auto_execute: Run the script on ``load``; otherwise expose it as
            ``window.userScript``.
        enable_webgl: Check for a WebGL context before running the script.

    Raises:
        ValidationError: If ``script`` is not a non-empty string.
    """
    if not isinstance(script, str) or not script.strip():
        raise ValidationError(
            "Test script must be a non-empty string",
            parameter_name="script",
            parameter_value=type(script).__name__,
            expected_format="JavaScript function source",
        )

    if auto_execute:
        webgl_check = "        ensureWebGLContext();\n" if enable_webgl else ""
        body = _AUTO_EXECUTE.substitute(script=script, webgl_check=webgl_check)
    else:
        body = _MANUAL_EXECUTE.substitute(script=script)

    return _PAGE.substitute(
        title=title if title is not None else f"Three.js Test - {test_name}",
        canvas_id=CANVAS_ELEMENT_ID,
        library_url=Template(LIBRARY_CDN_URL).substitute(version=library_version),
        test_name=json.dumps(test_name),
        seed=json.dumps(seed),
        body=body,
    )


__all__ = ["generate_test_html", "CANVAS_ELEMENT_ID", "LIBRARY_CDN_URL"]
