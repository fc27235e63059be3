import pytest

from rosbridge_client.protocol import message


def test_subscribe():

    assert message.subscribe('subscribe:/a:1', '/a') == {'op': 'subscribe', 'id': 'subscribe:/a:1', 'topic': '/a'}

    full = message.subscribe('subscribe:/a:1', '/a', 'std_msgs/String', throttle_rate=10, queue_length=2)
    assert full['type'] == 'std_msgs/String'
    assert full['throttle_rate'] == 10
    assert full['queue_length'] == 2


def test_publish_copies_msg():

    msg = {'data': 1}
    built = message.publish('/a', msg)
    msg['data'] = 2

    assert built == {'op': 'publish', 'topic': '/a', 'msg': {'data': 1}}


def test_call_service_defaults_args():
    built = message.call_service('call_service:/s:1', '/s')
    assert built == {'op': 'call_service', 'id': 'call_service:/s:1', 'service': '/s', 'args': {}}


def test_service_response():

    built = message.service_response('remote:1', '/s', 1, {'x': 1})
    assert built == {'op': 'service_response', 'id': 'remote:1', 'service': '/s', 'result': True, 'values': {'x': 1}}

    built = message.service_response('remote:1', None, False)
    assert built == {'op': 'service_response', 'id': 'remote:1', 'result': False}


def test_advertise_service():
    assert message.advertise_service('/s', 'pkg/Srv') == {'op': 'advertise_service', 'service': '/s', 'type': 'pkg/Srv'}
    assert message.unadvertise_service('/s') == {'op': 'unadvertise_service', 'service': '/s'}


def test_set_level():
    assert message.set_level('error') == {'op': 'set_level', 'level': 'error'}
    with pytest.raises(ValueError):
        message.set_level('loud')


def test_is_response():
    assert message.is_response({'id': 'x', 'result': True, 'values': {}})
    assert message.is_response({'op': 'service_response', 'id': 'x', 'result': True})
    assert not message.is_response({'op': 'publish', 'id': 'x', 'result': True})
    assert not message.is_response({'id': 'x'})
    assert not message.is_response({'op': 'status', 'level': 'info'})


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
