"""The main public API of smartcodable."""

from __future__ import annotations

import logging

from smartcodable._errors import (
    CollectionElementDecodeError as CollectionElementDecodeError,
)
from smartcodable._errors import DecodeError as DecodeError
from smartcodable._errors import MissingFieldDecodeError as MissingFieldDecodeError
from smartcodable._errors import NormalizationError as NormalizationError
from smartcodable._errors import SmartCodableError as SmartCodableError
from smartcodable._errors import TypeMismatchDecodeError as TypeMismatchDecodeError
from smartcodable._errors import (
    UnhandledTypeDecodeError as UnhandledTypeDecodeError,
)
from smartcodable._typing import ReadableBinary as ReadableBinary
from smartcodable.decodable import PostDecodeHook as PostDecodeHook
from smartcodable.decodable import SmartDecodable as SmartDecodable
from smartcodable.decode import DecodeContext as DecodeContext
from smartcodable.decode import DecodeStep as DecodeStep
from smartcodable.decode import DecodeStepFn as DecodeStepFn
from smartcodable.decode import DecodeStepObject as DecodeStepObject
from smartcodable.decode import TypeReader as TypeReader
from smartcodable.decode import TypeReaderRegistry as TypeReaderRegistry
from smartcodable.decode import default_decode_steps as default_decode_steps
from smartcodable.deserialize import Decoder as Decoder
from smartcodable.deserialize import Source as Source
from smartcodable.deserialize import decode_many as decode_many
from smartcodable.deserialize import decode_one as decode_one
from smartcodable.deserialize import deserialize as deserialize
from smartcodable.deserialize import deserialize_list as deserialize_list
from smartcodable.deserialize import from_data as from_data
from smartcodable.deserialize import from_dict as from_dict
from smartcodable.deserialize import from_json as from_json
from smartcodable.deserialize import list_from_array as list_from_array
from smartcodable.deserialize import list_from_data as list_from_data
from smartcodable.deserialize import list_from_json as list_from_json
from smartcodable.diagnostics import DiagnosticSink as DiagnosticSink
from smartcodable.diagnostics import LoggingDiagnosticSink as LoggingDiagnosticSink
from smartcodable.normalize import NormalizationStage as NormalizationStage
from smartcodable.options import DataDecoding as DataDecoding
from smartcodable.options import DataStrategy as DataStrategy
from smartcodable.options import DateDecoding as DateDecoding
from smartcodable.options import DateStrategy as DateStrategy
from smartcodable.options import DecodingOption as DecodingOption
from smartcodable.options import FloatDecoding as FloatDecoding
from smartcodable.options import FloatStrategy as FloatStrategy
from smartcodable.options import KeyDecoding as KeyDecoding
from smartcodable.options import KeyStrategy as KeyStrategy
from smartcodable.options import ResolvedConfig as ResolvedConfig

logging.getLogger(__name__).addHandler(logging.NullHandler())
