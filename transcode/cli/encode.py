#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

import sys
from argparse import ArgumentParser, Namespace
from typing import Any, Optional

from structlog import get_logger

logger = get_logger()


def create_parser() -> ArgumentParser:
    from transcode.cli.util import create_parser
    parser = create_parser()
    parser.add_argument('--registry', required=True,
                        help='Registry document (JSON, or YAML otherwise), a whole contract metadata file also works')
    parser.add_argument('--type-id', type=int, required=True, help='Id of the type the value is encoded as')
    value_args = parser.add_mutually_exclusive_group(required=True)
    value_args.add_argument('--value', help='The value in JSON or YAML syntax, hex strings must be quoted')
    value_args.add_argument('--value-file', help='Read the value from a JSON or YAML file')
    parser.add_argument('--strict-field-names', action='store_true',
                        help='Match struct fields to map keys by name instead of by position')
    parser.add_argument('--max-bytes', type=int,
                        help='Fail when the encoded value would be longer than this many bytes')
    parser.add_argument('--output', choices=['hex', 'raw'], default='hex',
                        help='Print 0x-prefixed hex (default) or write the raw bytes to stdout')
    return parser


def load_value(args: Namespace) -> Any:
    import yaml
    if args.value_file is not None:
        with open(args.value_file, 'r') as file:
            return yaml.safe_load(file)
    return yaml.safe_load(args.value)


def execute(args: Namespace) -> int:
    import yaml

    from transcode.conf import get_global_settings
    from transcode.encoder import Encoder
    from transcode.exception import TranscodeError
    from transcode.schema import Registry
    from transcode.serialization import SerializationError, Serializer

    settings = get_global_settings()
    if args.strict_field_names:
        settings = settings.model_copy(update={'STRICT_FIELD_NAMES': True})

    try:
        registry = Registry.from_file(args.registry)
        value = load_value(args)
        serializer = Serializer.build_bytes_serializer()
        output = serializer.with_optional_max_bytes(args.max_bytes)
        Encoder(registry, settings=settings).encode(args.type_id, value, output)
        data = bytes(serializer.finalize())
    except (TranscodeError, SerializationError, yaml.YAMLError, OSError) as e:
        logger.debug('encode command failed', exc_info=True)
        print(f'error: {e}', file=sys.stderr)
        return 1

    if args.output == 'raw':
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
    else:
        print('0x' + data.hex())
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    return execute(args)
