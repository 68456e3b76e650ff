"""
Tests for the relay client, using a stubbed requests session.
"""
import base64
import json
from unittest import mock

import pytest
import requests

from flaggrid.client import (
    COMMUNICATION_FAILURE_MESSAGE,
    GridClient,
    guess_mime_type,
    submit,
)
from flaggrid.exceptions import SubmissionError, TransportError, ValidationError

IMAGE_BYTES = b'GIF89a fake image'


def make_response(status_code=200, json_data=None, text=''):
    response = requests.Response()
    response.status_code = status_code
    response.encoding = 'utf-8'
    body = json.dumps(json_data) if json_data is not None else text
    response._content = body.encode('utf-8')
    return response


def make_client(status_code=200, json_data=None, text=''):
    response = make_response(status_code, json_data, text)
    session = mock.Mock(spec=requests.Session)
    session.post.return_value = response
    return GridClient('http://relay.test/', timeout=5, session=session), session


class TestSubmit:

    def test_returns_text_verbatim(self):
        client, session = make_client(json_data={'text': '🇬🇧 UK  ❌ -  🇯🇵 Japan  '})

        assert client.submit(IMAGE_BYTES, 'image/gif') == '🇬🇧 UK  ❌ -  🇯🇵 Japan  '

    def test_posts_base64_payload_once(self):
        client, session = make_client(json_data={'text': 'grid'})

        client.submit(IMAGE_BYTES, 'image/gif')

        session.post.assert_called_once_with(
            'http://relay.test/api/extractGrid',
            json={
                'imageBase64': base64.b64encode(IMAGE_BYTES).decode('ascii'),
                'mimeType': 'image/gif',
            },
            timeout=5,
        )

    def test_error_status_raises_submission_error(self):
        client, session = make_client(status_code=500, text='Failed to process the image with the AI model.')

        with pytest.raises(SubmissionError) as excinfo:
            client.submit(IMAGE_BYTES, 'image/gif')

        assert excinfo.value.status_code == 500
        assert excinfo.value.body == 'Failed to process the image with the AI model.'
        assert '500' in str(excinfo.value)
        assert session.post.call_count == 1

    def test_client_error_status(self):
        client, _ = make_client(status_code=400, text='Missing mimeType in request body.')

        with pytest.raises(SubmissionError) as excinfo:
            client.submit(IMAGE_BYTES, 'image/gif')

        assert excinfo.value.status_code == 400
        assert isinstance(excinfo.value, TransportError)

    @pytest.mark.parametrize('status_code', [300, 302, 304])
    def test_redirect_status_raises_submission_error(self, status_code):
        client, _ = make_client(status_code=status_code, json_data={'text': 'grid'})

        with pytest.raises(SubmissionError) as excinfo:
            client.submit(IMAGE_BYTES, 'image/gif')

        assert excinfo.value.status_code == status_code

    def test_module_submit_closes_session(self, monkeypatch):
        session = mock.MagicMock(spec=requests.Session)
        session.__enter__.return_value = session
        session.post.return_value = make_response(json_data={'text': 'grid'})
        monkeypatch.setattr(requests, 'Session', lambda: session)

        assert submit(IMAGE_BYTES, 'image/gif', base_url='http://relay.test') == 'grid'
        session.__exit__.assert_called_once()

    def test_network_failure(self):
        client, session = make_client()
        session.post.side_effect = requests.ConnectionError('refused')

        with pytest.raises(TransportError, match=COMMUNICATION_FAILURE_MESSAGE) as excinfo:
            client.submit(IMAGE_BYTES, 'image/gif')

        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

    def test_non_json_response(self):
        client, _ = make_client(text='<html>Service Unavailable</html>')

        with pytest.raises(TransportError, match=COMMUNICATION_FAILURE_MESSAGE):
            client.submit(IMAGE_BYTES, 'image/gif')

    @pytest.mark.parametrize('json_data', [{}, {'text': ''}, ['text'], {'text': 3}])
    def test_missing_text_field(self, json_data):
        client, _ = make_client(json_data=json_data)

        with pytest.raises(TransportError):
            client.submit(IMAGE_BYTES, 'image/gif')

    def test_empty_image(self):
        client, session = make_client()

        with pytest.raises(ValidationError):
            client.submit(b'', 'image/png')
        session.post.assert_not_called()

    def test_unrecognized_mime_type(self):
        client, session = make_client()

        with pytest.raises(ValidationError):
            client.submit(IMAGE_BYTES, 'image/bmp')
        session.post.assert_not_called()


class TestSubmitFile:

    def test_reads_file_and_guesses_mime_type(self, tmp_path):
        image_path = tmp_path / 'grid.PNG'
        image_path.write_bytes(IMAGE_BYTES)
        client, session = make_client(json_data={'text': 'grid'})

        assert client.submit_file(image_path) == 'grid'
        assert session.post.call_args.kwargs['json']['mimeType'] == 'image/png'

    @pytest.mark.parametrize('name, expected', [
        ('a.jpg', 'image/jpeg'),
        ('a.jpeg', 'image/jpeg'),
        ('a.gif', 'image/gif'),
        ('a.webp', 'image/webp'),
    ])
    def test_guess_mime_type(self, name, expected):
        assert guess_mime_type(name) == expected

    def test_unsupported_extension(self):
        with pytest.raises(ValidationError):
            guess_mime_type('grid.bmp')
