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

"""
This module holds the simple encodings of the wire format.

The general organization is that each submodule `x` deals with a single type and looks like this:

    def encode_x(serializer: Serializer, value: ValueType) -> int:
        ...

    def decode_x(deserializer: Deserializer) -> Result[XRead, SerializationError]:
        ...

Encoders return the number of bytes written and raise `WriteError` when the sink fails. Decoders never raise for bad
input, failures are returned as `Err` and successful reads carry the number of bytes consumed and an optional
non-canonical advisory.
"""
