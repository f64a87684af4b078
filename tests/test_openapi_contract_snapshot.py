from scripts.check_openapi_contracts import _critical_paths


def test_critical_paths_only_include_components_referenced_by_critical_routes():
    spec = {
        "paths": {
            "/api/credits": {
                "post": {
                    "responses": {
                        "201": {
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/CreditView"}
                                }
                            }
                        }
                    }
                }
            },
            "/internal/metrics": {
                "get": {
                    "responses": {
                        "200": {
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/MetricsResponse"}
                                }
                            }
                        }
                    }
                }
            },
        },
        "components": {
            "schemas": {
                "CreditView": {
                    "type": "object",
                    "properties": {
                        "status": {"$ref": "#/components/schemas/CreditStatus"}
                    },
                },
                "CreditStatus": {"type": "string"},
                "MetricsResponse": {"type": "object"},
            }
        },
    }

    snapshot = _critical_paths(spec)

    assert "/api/credits" in snapshot["paths"]
    assert "/internal/metrics" not in snapshot["paths"]
    assert snapshot["components"]["schemas"] == {
        "CreditView": {
            "type": "object",
            "properties": {
                "status": {"$ref": "#/components/schemas/CreditStatus"}
            },
        },
        "CreditStatus": {"type": "string"},
    }
