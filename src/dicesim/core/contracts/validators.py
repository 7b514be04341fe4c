"""
JSON Schema Contract Validators

Валидация plain-data результатов движка (to_dict()) против формальных
JSON Schema контрактов. Потребитель (UI, сериализация) получает только
числа, строки, списки и словари.

Схемы (dicesim/core/contracts/schema/):
- dice_specification.json
- theoretical_summary.json
- simulation_summary.json
- dice_roll_report.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются как package data рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'theoretical_summary')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор данных против одной JSON Schema."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class DiceSpecificationValidator(ContractValidator):
    def __init__(self):
        super().__init__("dice_specification")


class TheoreticalSummaryValidator(ContractValidator):
    def __init__(self):
        super().__init__("theoretical_summary")


class SimulationSummaryValidator(ContractValidator):
    def __init__(self):
        super().__init__("simulation_summary")


class DiceRollReportValidator(ContractValidator):
    def __init__(self):
        super().__init__("dice_roll_report")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_dice_specification(data: Dict[str, Any]) -> None:
    DiceSpecificationValidator().validate(data)


def validate_theoretical_summary(data: Dict[str, Any]) -> None:
    TheoreticalSummaryValidator().validate(data)


def validate_simulation_summary(data: Dict[str, Any]) -> None:
    SimulationSummaryValidator().validate(data)


def validate_dice_roll_report(data: Dict[str, Any]) -> None:
    """
    Валидация объединённого отчёта (спецификация + оба результата).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DiceRollReportValidator().validate(data)


__all__ = [
    "ValidationError",
    "SchemaLoader",
    "ContractValidator",
    "DiceSpecificationValidator",
    "TheoreticalSummaryValidator",
    "SimulationSummaryValidator",
    "DiceRollReportValidator",
    "validate_dice_specification",
    "validate_theoretical_summary",
    "validate_simulation_summary",
    "validate_dice_roll_report",
]
