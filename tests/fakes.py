"""
Stand-ins for the OpenAI client and the DynamoDB progress table.
"""
from types import SimpleNamespace


class FakeCompletions:
    """Records chat.completions.create calls and replays a canned reply."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_openai_client(content=None, error=None):
    completions = FakeCompletions(content=content, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


class FakeProgressTable:
    """Minimal DynamoDB Table stand-in keyed by user_id."""

    def __init__(self):
        self.items = []

    def put_item(self, Item):
        self.items.append(dict(Item))

    def query(self, KeyConditionExpression, ExpressionAttributeValues, ScanIndexForward=True, Limit=None):
        user_id = ExpressionAttributeValues[':uid']
        items = [item for item in self.items if item['user_id'] == user_id]
        items.sort(key=lambda item: item['timestamp'], reverse=not ScanIndexForward)
        return {'Items': items[:Limit] if Limit else items}
