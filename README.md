# naoqi_converters

Converters that read a robot's memory and motion services and turn the
readings into plain, stamped Python records: joint and battery
diagnostics, sonar ranges, IMU samples, odometry, lists of memory values,
and camera calibration data. Audio and touch event messages can be passed
through to callbacks as well.

Every converter is built around a *session*: any object with a
`service(name)` method that returns a proxy with a `call(method, *args)`
method. Point it at a real robot connection, or at a small fake in your
tests. The converter reads through that session and hands each message to
the callback you registered for a `MessageAction`.

## Installing

```
pip install naoqi_converters
```

It has no dependencies beyond the standard library. Python 3.10 or newer.

## Using a converter

```python
from naoqi_converters.base import MessageAction, NaoqiVersion, Robot
from naoqi_converters.sonar import SonarConverter

with SonarConverter(
    "sonar", 10.0, session,
    robot=Robot.PEPPER, naoqi_version=NaoqiVersion(2, 5),
) as converter:
    converter.register_callback(MessageAction.PUBLISH, print)
    converter.call_all([MessageAction.PUBLISH])
```

Each `call_all(actions)` reads fresh data once and runs the callback
registered for each action in turn. An action without a callback raises
`MissingCallbackError` (a `KeyError`). `unregister_callback(action)` drops
a callback, and `registered_actions` tells which actions have one.

Every converter takes the keyword options of `BaseConverter`:

- `robot`: a `Robot` (`NAO`, `PEPPER`, `ROMEO`, default `UNIDENTIFIED`).
  Diagnostics and sonar pick their services and keys from it.
- `naoqi_version`: a `NaoqiVersion(major, minor, patch, build)`;
  `is_lesser(major, minor)` compares against it.
- `clock`: a function returning seconds, used by `now()` to stamp
  messages (default `time.time`).

When a memory read fails or returns too few values, the diagnostics,
sonar and IMU converters log an error and skip that round; no callback
runs.

## What is in the package

- `naoqi_converters.base`: `Robot`, `NaoqiVersion`, `MessageAction`
  (`PUBLISH`, `RECORD`, `LOG`), `Header`, `MissingCallbackError` and
  `BaseConverter`, which all converters share.
- `naoqi_converters.events`: `AudioEventConverter` and
  `TouchEventConverter`. `call_all(actions, msg)` keeps a deep copy of
  `msg` in `message` and passes it to each callback.
- `naoqi_converters.memory_list`: `MemoryListConverter(key_list, name,
  frequency, session)` reads all keys with one `getListData` call and
  sorts the values into the `ints`, `floats` and `strings` of a
  `MemoryList`, as `MemoryPair(memory_key, data)` entries. Booleans count
  as ints; values of any other type are left out.
- `naoqi_converters.camera_info`: `CameraInfo` calibration records for
  each `CameraSource` and `Resolution`. `camera_info(source, resolution)`
  returns the calibration, or an empty one (with a logged warning) when
  none is known; `stereo_camera_info(width, height, reduction_factor)`
  builds the stereo calibration; `empty_camera_info()` gives a blank
  record. `camera_settings(source, resolution, has_stereo=False)` returns
  a `CameraSettings` with the `ColorSpace`, image encoding (`"rgb8"` or
  `"16UC1"`), channel layout, frame id and calibration to use.
- `naoqi_converters.diagnostics`: `DiagnosticsConverter` reports each
  joint's temperature, stiffness and limits (warning from 68 °C, error
  from 74 °C), a joints summary, battery charge and current, and a CPU
  entry, as a `DiagnosticArray` of `DiagnosticStatus` entries with a
  `DiagnosticLevel`.
- `naoqi_converters.sonar`: `SonarConverter` produces a list with one
  `Range` per sonar (front and back on Pepper, left and right on NAO).
  On software older than 2.9 it subscribes to `ALSonar` on first read;
  `reset()` and `close()` unsubscribe, and it works as a context manager.
- `naoqi_converters.imu`: `ImuConverter(name, location, frequency,
  session)` for the `ImuLocation.TORSO` or `ImuLocation.BASE` inertial
  unit, producing an `Imu` with `Quaternion` orientation and `Vector3`
  rates; `quaternion_from_rpy(roll, pitch, yaw)` does the rotation.
- `naoqi_converters.odom`: `OdomConverter` turns the torso position and
  robot velocity from `ALMotion` into an `Odometry` record.

## What it does not do

The package only builds records and hands them to your callbacks. It does
not publish them anywhere, record them to disk, or run as a command or
service. It does not fetch camera images: `camera_info` and
`camera_settings` only describe how a camera is calibrated and read. There
is no converter for laser scans, for single memory values, or for the
robot's configuration strings.

## Running the tests

```
pip install "naoqi_converters[test]"
pytest
```