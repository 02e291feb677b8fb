# temporal_kg

Building blocks for a temporal knowledge graph: entities and
relationships that carry both a *valid time* (when a fact holds in the
world) and a *transaction time* (when the fact was recorded).

## What is in the package

| Module | Contents |
| --- | --- |
| `temporal_kg.config` | `Config`, `Context` |
| `temporal_kg.errors` | `GraphError`, `ErrorKind`, `from_backoff`, `ApiError`, `ApiErrorKind` |
| `temporal_kg.types` | `EntityType`, `TemporalRange`, `Node`, `Edge`, `validate_temporal_range` |
| `temporal_kg.query` | Gremlin query string builders |
| `temporal_kg.models` | pydantic request and response models of the HTTP API |
| `temporal_kg.handlers` | functions behind the API operations |
| `temporal_kg.app` | `ApiState`, `create_app` (FastAPI application) |
| `temporal_kg.middleware` | `check_bearer_token`, `RateLimiter` |
| `temporal_kg.client` | `TemporalGraphClient` and the `temporal-kg-client` command |

## Configuration

`Config` is a dataclass of service settings: region, graph endpoint and
port, search, table, bucket and queue locations, memory service
credentials, retry and connection limits, and extraction thresholds.

`Config.from_env(environ=None)` reads from `os.environ`, or from the
mapping you pass. These variables are required; a missing one raises
`GraphError` of kind `ErrorKind.CONFIGURATION_ERROR`:

`AWS_REGION`, `NEPTUNE_ENDPOINT`, `OPENSEARCH_ENDPOINT`,
`DYNAMODB_TABLE`, `TEMPORAL_TABLE`, `S3_BUCKET`, `SQS_QUEUE_URL`,
`MEMORY_URL`.

These are optional; when absent or unparsable they take the default
shown:

| Variable | Default |
| --- | --- |
| `NEPTUNE_PORT` | 8182 |
| `NEPTUNE_IAM_AUTH` | false (only `true` / `false` are accepted) |
| `MEMORY_USERNAME` | empty |
| `MEMORY_PASSWORD` | empty |
| `MAX_RETRIES` | 3 |
| `CONNECTION_TIMEOUT` | 30 |
| `MAX_CONNECTIONS` | 100 |
| `ENTITY_EXTRACTION_CONFIDENCE` | 0.7 |
| `RELATIONSHIP_DETECTION_CONFIDENCE` | 0.7 |
| `MAX_CONTEXT_WINDOW` | 512 |
| `BATCH_SIZE` | 32 |
| `MEMORY_SIZE` | 384 |

`Config()` gives the plain defaults (50 connections, 30 s timeout),
`Config.for_testing()` local test settings (10 connections, 5 s
timeout, `test-*` table, bucket and queue names), and
`Config.new(neptune_endpoint, max_connections, connection_timeout)` the
defaults around a given graph endpoint. `Context(config)` is a frozen
holder for sharing a configuration.

## Graph types

- `EntityType` wraps a name. The built-ins are `PERSON`,
  `ORGANIZATION`, `LOCATION`, `EVENT`, `TOPIC`, `DOCUMENT`, `VERTEX`,
  `NODE` and `PRODUCT`; `EntityType.parse(text)` accepts any string, and
  names outside the built-ins report `is_custom`.
- `TemporalRange(start, end)` takes timezone-aware datetimes (or
  `None` for an open end) and stores them in UTC.
  `TemporalRange.from_now()` starts now with no end;
  `TemporalRange.unbounded()` is open at both ends. `to_dict` writes
  RFC 3339 strings with a `Z` suffix and `from_dict` reads them back.
- `Node` and `Edge` are dataclasses with UUID identifiers, a label,
  a `properties` dict and the two temporal ranges; both round-trip
  through `to_dict` / `from_dict`, which raise `GraphError` on missing
  or malformed fields.
- `validate_temporal_range(r)` raises `GraphError` of kind
  `INVALID_TEMPORAL_RANGE` when `r.start` is after `r.end`.

```python
import uuid
from temporal_kg.types import EntityType, Node, TemporalRange

node = Node(
    id=uuid.uuid4(),
    entity_type=EntityType.PERSON,
    label="Jane Smith",
    properties={"name": "Jane Smith"},
    valid_time=TemporalRange.from_now(),
    transaction_time=TemporalRange.from_now(),
)
assert Node.from_dict(node.to_dict()) == node
```

## Query building

`temporal_kg.query` returns Gremlin traversal strings:
`create_node`, `get_node`, `update_node`, `delete_node`,
`create_edge`, `get_edge`, `update_edge`, `delete_edge`,
`get_edges_for_node`, `get_connected_nodes`, `get_nodes_by_label`,
`get_edges_by_label`, `get_edges_between`, `get_edges_from`,
`get_edges_to` and `get_vertex`.

Create and update queries emit one `.property('key', <json>)` step per
field, in sorted key order, with compact JSON values.
`get_edges_for_node` and `get_connected_nodes` take an optional
`TemporalRange` and add `valid_time.start` / `valid_time.end` filters
in whole Unix seconds:

```python
from temporal_kg import query

gremlin = query.get_edges_for_node(node.id, node.valid_time)
# "g.V('<id>').bothE().has('valid_time.start', gte(<seconds>))"
```

## Errors

`GraphError` carries an `ErrorKind` and a message and displays as
`"<prefix>: <message>"`, e.g. `Database error: test error`.
`from_backoff(message, permanent)` gives a `BACKOFF` error for a
permanent failure and a `RETRY` error (`Transient error: ...`)
otherwise.

`ApiError` carries an `ApiErrorKind` (`NOT_FOUND`, `BAD_REQUEST`,
`UNAUTHORIZED`, `RATE_LIMIT_EXCEEDED`, `INTERNAL`, or `CORE` wrapping a
`GraphError`). `to_response()` returns the status code and a body of
the form `{"error": {"message": ..., "code": ...}}`.

## HTTP API

`create_app(state=None)` builds a FastAPI application with:

- `GET /health` – status, version, uptime in whole seconds (from
  `ApiState.uptime()`) and component health;
- `GET /version` – version, build timestamp and commit hash;
- API docs at `/swagger-ui` and the OpenAPI document at
  `/api-docs/openapi.json`;
- a handler turning `ApiError` into its JSON response, and request
  logging (method, path, status, latency) on the `temporal_kg.app`
  logger.

Serve it with any ASGI server of your choice.

`temporal_kg.handlers` also holds functions for the node, edge and
knowledge operations (`create_node`, `create_nodes_batch`, `get_node`,
`update_node`, `delete_node`, `create_edge`, `create_edges_batch`,
`get_edge`, `update_edge`, `delete_edge`, `query_knowledge`,
`store_information`). The ID-taking ones raise a `BAD_REQUEST`
`ApiError` for an ID that is not a UUID.

## Middleware helpers

- `check_bearer_token(header)` is true only for `"Bearer token"`.
- `RateLimiter(max_requests, window, clock=time.monotonic)` counts
  requests per client in a fixed window (seconds or a `timedelta`);
  `check(client_ip)` returns `False` once the limit is reached, until
  the window has passed.

Neither is attached to the application by `create_app`.

## Client

`TemporalGraphClient(base_url, client=None)` wraps an `httpx.Client`
and returns decoded JSON from `health_check()`, `create_node(data)`,
`get_node(node_id)`, `create_edge(data)` and `query_knowledge(query)`.
It is a context manager and closes the HTTP client it created.

With an API running, run:

```
temporal-kg-client --base-url http://localhost:3000
```

(`--base-url` defaults to `http://localhost:3000`.) It checks health,
creates a person and an organisation, links them with an
`EMPLOYED_AT` edge, reads the person back and runs a knowledge query,
printing each step.

## What this package does not do

- It does not store anything and does not connect to a graph database.
  The query builders only produce strings; nothing in the package sends
  them anywhere.
- The handler functions return example data: created, fetched and
  updated nodes and edges are freshly made examples, deletes only
  validate the ID, batch calls report every item as successful, and
  knowledge queries and stores return fixed sample answers.
- The application routes only `/health` and `/version`; the node, edge
  and knowledge handlers are not exposed over HTTP, so the client's
  node, edge and query calls need a server that provides those routes.
- There is no command that starts a server.