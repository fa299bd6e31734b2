"""
Client Examples for the Elasticsearch HTTP client
Demonstrates configuration and the (outcome, status, body) results
"""

import json

from elastic_http import (
    ConfigLoader,
    ConfigValidator,
    ElasticConfig,
    HttpClient,
    Outcome,
)


# =============================================================================
# Example 1: Programmatic Configuration
# =============================================================================

def programmatic_config_example() -> ElasticConfig:
    """Configure the client programmatically"""
    loader = ConfigLoader()

    return loader.load(
        config={
            "base_url": "http://localhost:9200",
            "timeout": 30000,

            # Basic auth, sent with every request unless overridden per call
            "username": "elastic",
            "password": "changeme",
        },
        env=False,
    )


# =============================================================================
# Example 2: Amazon OpenSearch / Elasticsearch Service
# =============================================================================

def aws_config_example() -> ElasticConfig:
    """
    Load AWS signing settings from environment variables

    Set these environment variables before running:

    export ELASTIC_BASE_URL="https://search-mydomain.us-east-1.es.amazonaws.com"
    export ELASTIC_AWS_ENABLED="true"
    export ELASTIC_AWS_ACCESS_KEY_ID="AKID..."
    export ELASTIC_AWS_SECRET_ACCESS_KEY="..."
    export ELASTIC_AWS_REGION="us-east-1"
    """
    loader = ConfigLoader()
    return loader.load(env=True)


# =============================================================================
# Example 3: Indexing and Searching
# =============================================================================

def search_example(client: HttpClient) -> None:
    """Index a document, search for it and clean up"""
    outcome, status, body = client.put(
        "/answers/_doc/1",
        body={"text": "I like using Elasticsearch"},
        query=[("refresh", "true")],
    )
    print(f"PUT -> {outcome.value} {status}")

    outcome, status, body = client.get(
        "/answers/_search",
        body={"query": {"match": {"text": "elasticsearch"}}},
    )
    if outcome is Outcome.OK:
        print(f"Found {body['hits']['total']} hit(s)")
    elif status == 0:
        print(f"No response from cluster: {body}")
    else:
        print(f"Search failed with HTTP {status}: {body}")

    client.delete("/answers")


# =============================================================================
# Example 4: Bulk Indexing
# =============================================================================

def bulk_example(client: HttpClient) -> None:
    """Send newline-delimited operations to /_bulk"""
    lines = []
    for doc_id, text in enumerate(["first answer", "second answer"], start=1):
        lines.append(json.dumps({"index": {"_index": "answers", "_id": str(doc_id)}}))
        lines.append(json.dumps({"text": text}))

    # The client appends the final newline
    outcome, status, body = client.bulk("\n".join(lines))
    print(f"BULK -> {outcome.value} {status} errors={body.get('errors') if isinstance(body, dict) else body}")


# =============================================================================
# Example 5: Configuration Validation
# =============================================================================

def validation_example() -> None:
    """Validate configuration before use"""
    validator = ConfigValidator()

    result = validator.validate({"aws_enabled": True, "username": "elastic"})

    if not result.valid:
        print("Configuration validation failed:")
        for error in result.errors:
            print(f"  - {error.field}: {error.message}")


# =============================================================================
# Run Examples
# =============================================================================

if __name__ == "__main__":
    print("=== Elasticsearch HTTP Client Examples ===\n")

    print("1. Configuration Validation:")
    validation_example()
    print()

    with HttpClient(programmatic_config_example()) as client:
        print("2. Search:")
        search_example(client)
        print()

        print("3. Bulk:")
        bulk_example(client)
