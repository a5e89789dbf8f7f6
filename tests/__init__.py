from os import PathLike
from pathlib import Path

DATA_DIRECTORY = Path(__file__).parent / 'data'
INPUT_DIRECTORY = DATA_DIRECTORY / 'input'
OUTPUT_DIRECTORY = DATA_DIRECTORY / 'output'
REFERENCE_DIRECTORY = DATA_DIRECTORY / 'reference'


def check_reference_directory(test_directory: PathLike, reference_directory: PathLike):
    if not isinstance(test_directory, Path):
        test_directory = Path(test_directory)
    if not isinstance(reference_directory, Path):
        reference_directory = Path(reference_directory)

    for reference_filename in reference_directory.iterdir():
        if reference_filename.is_dir():
            check_reference_directory(
                test_directory / reference_filename.name, reference_filename
            )
        else:
            test_filename = test_directory / reference_filename.name

            with open(test_filename) as test_file, open(reference_filename) as reference_file:
                test_lines = list(test_file.readlines())
                reference_lines = list(reference_file.readlines())

                assert len(test_lines) == len(
                    reference_lines
                ), f'"{test_filename}" has {len(test_lines)} lines, reference has {len(reference_lines)}'
                for line_index, (test_line, reference_line) in enumerate(
                    zip(test_lines, reference_lines)
                ):
                    assert (
                        test_line == reference_line
                    ), f'"{test_filename}" line {line_index + 1}: {test_line!r} != {reference_line!r}'
