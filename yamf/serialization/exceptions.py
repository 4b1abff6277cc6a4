# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


class SerializationError(ValueError):
    """Base class for every error raised or returned by the codecs."""


class OutOfDataError(SerializationError):
    """The input ended in the middle of a value."""


class ValueTooBigError(SerializationError):
    """A declared value length exceeds the configured maximum value size."""


class NonCanonicalError(SerializationError):
    """ A VarU64 was decoded from an encoding longer than the minimal one.

    This is an advisory condition: the decoded value is correct and usable. Decoders attach an instance of this class
    to their successful result instead of failing, it's up to callers to decide whether to reject it.
    """

    def __init__(self, value: int, size: int, canonical_size: int) -> None:
        super().__init__(f'non-canonical encoding: {value} uses {size} bytes instead of {canonical_size}')
        self.value = value
        self.size = size
        self.canonical_size = canonical_size


class WriteError(SerializationError):
    """ The underlying sink did not accept all the bytes.

    `written` is the number of bytes accepted before the failure, for errors raised by an encoder it accounts for
    everything the encoder wrote so far.
    """

    def __init__(self, message: str, *, written: int = 0) -> None:
        super().__init__(message)
        self.written = written
