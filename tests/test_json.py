import json
import pytest

import rosbridge_client


def test_json_encode_and_decode():
    encode_and_decode(json.dumps, json.loads, dump_is_bytes=False)


def test_wrapper_encode_and_decode():
    encode_and_decode(rosbridge_client.json.dumps, rosbridge_client.json.loads)


def test_decode_text_frames():

    # Frames arrive from the transport as str, not bytes.

    decoded = rosbridge_client.json.loads('{"op": "publish", "topic": "/chatter", "msg": {"data": "hi"}}')
    assert decoded == {'op': 'publish', 'topic': '/chatter', 'msg': {'data': 'hi'}}


def test_dumps_text():
    encoded = rosbridge_client.json.dumps_text({'op': 'unsubscribe', 'topic': '/chatter'})
    assert isinstance(encoded, str)
    assert json.loads(encoded) == {'op': 'unsubscribe', 'topic': '/chatter'}


def test_decode_error():
    for bad in ('', 'not json', '{"unterminated": '):
        with pytest.raises(rosbridge_client.json.DecodeError):
            rosbridge_client.json.loads(bad)


def encode_and_decode(dumps, loads, dump_is_bytes=True):

    input_dictionary = dict()
    input_dictionary['list'] = [1, 2, 3, 'a', 'b', None, 'c', 'z']
    input_dictionary['dict'] = {'one': 1, 'two': 2}
    input_dictionary['none'] = None
    input_dictionary['true'] = True
    input_dictionary['false'] = False
    input_dictionary['float'] = 35.5

    encoded = dumps(input_dictionary)

    if dump_is_bytes:
        assert isinstance(encoded, bytes)
    else:
        assert isinstance(encoded, str)

    # It won't do to compare the encoded JSON against a pre-set notion of
    # what the encoded output should look like, as there is variance in
    # the handling of whitespace between the different JSON modules.

    decoded = loads(encoded)
    assert isinstance(decoded, dict)
    assert decoded == input_dictionary


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
