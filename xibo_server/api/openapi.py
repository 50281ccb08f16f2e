"""OpenAPI document and Swagger UI page for the /ext-api routes."""

from typing import Any

_FILE_NAME_PARAM = {
    "in": "path",
    "required": True,
    "schema": {"type": "string"},
}

_ERROR = {
    "description": "Error",
    "content": {
        "application/json": {
            "schema": {"type": "object", "properties": {"error": {"type": "string"}}}
        }
    },
}


def _binary(media_type: str, description: str) -> dict[str, Any]:
    return {
        "description": description,
        "content": {media_type: {"schema": {"type": "string", "format": "binary"}}},
    }


def build_openapi(server_url: str) -> dict[str, Any]:
    return {
        "openapi": "3.0.3",
        "info": {
            "title": "Xibo Agent Extended API",
            "version": "0.1.0",
            "description": "File upload and download endpoints used next to the Xibo MCP tools.",
        },
        "servers": [{"url": server_url}],
        "paths": {
            "/upload": {
                "post": {
                    "summary": "Upload one media file (image, video or font)",
                    "requestBody": {
                        "required": True,
                        "content": {
                            "multipart/form-data": {
                                "schema": {
                                    "type": "object",
                                    "properties": {"file": {"type": "string", "format": "binary"}},
                                    "required": ["file"],
                                }
                            }
                        },
                    },
                    "responses": {
                        "200": {"description": "Saved under persistent_data/uploads"},
                        "400": _ERROR,
                    },
                }
            },
            "/getImage/{filename}": {
                "get": {
                    "summary": "Generated image",
                    "parameters": [{"name": "filename", **_FILE_NAME_PARAM}],
                    "responses": {"200": _binary("image/png", "PNG image"), "400": _ERROR, "404": _ERROR},
                }
            },
            "/getVideo/{filename}": {
                "get": {
                    "summary": "Generated video",
                    "parameters": [{"name": "filename", **_FILE_NAME_PARAM}],
                    "responses": {"200": _binary("video/mp4", "MP4 video"), "400": _ERROR, "404": _ERROR},
                }
            },
            "/getFontImage/{fileName}": {
                "get": {
                    "summary": "Font preview image",
                    "parameters": [{"name": "fileName", **_FILE_NAME_PARAM}],
                    "responses": {"200": _binary("image/png", "PNG image"), "400": _ERROR, "404": _ERROR},
                }
            },
            "/download/{kind}/{fileName}": {
                "get": {
                    "summary": "Download a generated report, podcast or presentation",
                    "parameters": [
                        {
                            "name": "kind",
                            "in": "path",
                            "required": True,
                            "schema": {"type": "string", "enum": ["report", "podcast", "presentation"]},
                        },
                        {"name": "fileName", **_FILE_NAME_PARAM},
                    ],
                    "responses": {
                        "200": _binary("application/octet-stream", "File attachment"),
                        "400": _ERROR,
                        "404": _ERROR,
                    },
                }
            },
            "/products_info/upload/{productName}": {
                "post": {
                    "summary": "Replace the information files of a product",
                    "parameters": [{"name": "productName", **_FILE_NAME_PARAM}],
                    "requestBody": {
                        "required": True,
                        "content": {
                            "multipart/form-data": {
                                "schema": {
                                    "type": "object",
                                    "properties": {
                                        "file": {
                                            "type": "array",
                                            "items": {"type": "string", "format": "binary"},
                                        }
                                    },
                                }
                            }
                        },
                    },
                    "responses": {"200": {"description": "Files saved"}, "400": _ERROR},
                }
            },
            "/products_info/upload-form/{productName}": {
                "get": {
                    "summary": "HTML form for the products info upload",
                    "parameters": [{"name": "productName", **_FILE_NAME_PARAM}],
                    "responses": {"200": {"description": "HTML page"}},
                }
            },
            "/hello": {
                "get": {"summary": "Liveness check", "responses": {"200": {"description": "OK"}}}
            },
        },
    }


SWAGGER_UI_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>Xibo Agent Extended API</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css" />
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    window.ui = SwaggerUIBundle({ url: "{openapi_url}", dom_id: "#swagger-ui" });
  </script>
</body>
</html>
"""
