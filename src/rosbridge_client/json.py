''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`.
'''

# The business about conditionally importing the libraries is intended to
# avoid importing less efficient libraries if they are not available. With
# the right build process this could be determined at build time, instead
# of at run time.

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. To
# maintain alignment all 'dumps' methods need to do so as well. Inbound
# frames arrive as text; every 'loads' accepts both str and bytes.

def json_dumps(*args, **kwargs):
    return json.dumps(*args, **kwargs).encode()

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    DecodeError = (msgspec.DecodeError, UnicodeDecodeError)
elif orjson is not None:
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = (orjson.JSONDecodeError, UnicodeDecodeError)
else:
    dumps = json_dumps
    loads = json.loads
    DecodeError = (ValueError,)


def dumps_text(value):
    """ Encode *value* as JSON and return it as a str, suitable for a
        text frame on the wire.
    """

    return dumps(value).decode()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
