# recruitapi

Building blocks for a serverless recruitment API: domain models for
applications, documents, messages, posts and contact requests; JWT group
authorization for request handlers; and adapters for user management, file
storage, e-mail and message queuing.

Every adapter takes its client as a constructor argument, so the package has
no runtime dependencies and can be driven by real cloud clients or by test
doubles alike.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Overview

| Module | Purpose |
| --- | --- |
| `recruitapi.common` | Key and language constants, `LanguageCode`, `create_pk`, `content_type_from_extension`, `document_extension`, `fetch_file_content`, `request_error_response`, `RequestError`, `ValidationError` |
| `recruitapi.services` | Interfaces (`Logger`, `FileStorage`, `Emailer`, `MessageQueue`, `AuthProvider`, `DatabaseClient`) and data types (`EmailerInputParams`, `Attachment`, `PresignedRequest`, `AuthProviderAccessParams`, `EmailType`) |
| `recruitapi.structured_logger` | `StructuredLogger` and `new_stdout_logger()`, which writes one JSON object per line to standard output |
| `recruitapi.authorization` | `UserGroup`, `user_group_from_claims`, `authorization_middleware` |
| `recruitapi.documents` | `Document`, `DocStatus`, `DocumentType`, `create_document_sk`, per-type size limits |
| `recruitapi.applications` | `Application`, `PreScreeningStatus` and the nested info records |
| `recruitapi.messages` | `Message`, `MessageAuthor`, `create_message_sk` |
| `recruitapi.posts` | `Post` and `post_gsi_pk` |
| `recruitapi.contact` | `Contact` |
| `recruitapi.cognito` | `CognitoAuthProvider` and `sub_attribute_value` |
| `recruitapi.s3_storage` | `S3FileStorage` with presigned read (one hour) and write (thirty seconds) access |
| `recruitapi.ses_emailer` | `SesEmailer` and `render_template` |
| `recruitapi.sqs_queue` | `SQSMessageQueue` |

## Examples

Authorizing a handler by user group. Handlers take a context mapping and an
API gateway request mapping; the caller's group is read from
`requestContext.authorizer.jwt.claims["cognito:groups"]` (for example
`"[admin]"`) and passed on in the context under `"UserGroup"`:

```python
from recruitapi.authorization import UserGroup, authorization_middleware
from recruitapi.structured_logger import new_stdout_logger

def list_applications(ctx, request):
    ...

handler = authorization_middleware(list_applications, new_stdout_logger(), UserGroup.ADMIN)
```

A caller outside the allowed groups gets a 403 response with a JSON body.

Preparing a document record for an upload:

```python
from recruitapi.documents import Document, DocumentType

doc = Document()
doc.generate_keys("APP#1234", DocumentType.CV)
doc.generate_attributes_for_request("APP#1234", "Please upload your CV")
doc.generate_attributes_for_upload("resume.pdf", 120_000)
doc.validate()
doc.name        # 'APP#1234-Document-CV.pdf'
doc.max_file_size()  # 5242880
```

Rendering an e-mail template:

```python
from recruitapi.ses_emailer import render_template

render_template("<p>Hello {{.Name}}</p>", {"Name": "Ana"})
# '<p>Hello Ana</p>'
```

Queuing an e-mail. The client needs a `send_message(MessageBody=..., QueueUrl=...)`
method; e-mail parameters without a template, source, destination or subject
are refused with `ValueError`:

```python
from recruitapi.services import EmailerInputParams
from recruitapi.sqs_queue import SQSMessageQueue

queue = SQSMessageQueue(client, "queue-url")
queue.send_message(EmailerInputParams(
    template="<p>Hello {{.Name}}</p>",
    subject="Welcome",
    source="noreply@example.com",
    destination="ana@example.com",
    data={"Name": "Ana"},
))
```

## Errors

Errors are raised as exceptions. Validation of models raises
`recruitapi.common.ValidationError` (a `ValueError`); adapters wrap client
failures in `RuntimeError`. `request_error_response` logs a message and
returns an `HttpResponse` with a JSON body; for status codes of 500 and above
it raises `RequestError` carrying that response instead.

## What this package does not do

- It has no storage layer. The models carry their database attribute names in
  field metadata, and `services.DatabaseClient` describes the client
  interface, but nothing in the package reads records from or writes them to
  a database.
- It has no command and no HTTP server. Handlers are plain callables to be
  wired into whatever runtime serves the API.
- It does not create cloud clients. Each adapter must be given one.