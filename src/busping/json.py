''' Wrapper module for the JSON encoding used on the wire, providing the
    equivalent of :func:`json.loads` and :func:`json.dumps`.
'''

import msgspec


# The msgspec 'encode' operation returns bytes; everything that calls
# 'dumps' expects bytes, ready to be put in a frame.

encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()

dumps = encoder.encode
loads = decoder.decode

DecodeError = msgspec.DecodeError
EncodeError = msgspec.EncodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
