# どこで: `src/tumbler/__main__.py`。
# 何を: `python -m tumbler ...` の CLI エントリポイントを提供する。
# なぜ: 対話再生・headless export・軌道情報の確認を短い導線で実行できるようにするため。

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tumbler.core.runtime_config import runtime_config, set_config_path
from tumbler.core.scene import Scene, build_scene


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        default=None,
        help="config.yaml のパス（指定した場合は探索より優先）",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを出す")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="python -m tumbler")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="ウィンドウを開いてアニメーションを再生する")
    _add_common(p_run)

    p_export = sub.add_parser("export", help="先頭から N tick 分を PNG 連番（+ GIF / SVG）で書き出す")
    _add_common(p_export)
    p_export.add_argument(
        "--frames",
        type=int,
        default=None,
        help="書き出す tick 数（既定: 軌道 1 周分）",
    )
    p_export.add_argument("--out-dir", default=None, help="PNG の出力ディレクトリ（省略時: 既定の出力先）")
    p_export.add_argument("--gif", default=None, help="GIF の出力パス（指定時のみ書き出す）")
    p_export.add_argument("--svg", action="store_true", help="各フレームを SVG でも書き出す")
    p_export.add_argument("--no-png", action="store_true", help="PNG 連番を書き出さない")
    p_export.add_argument("--run-id", default=None, help="既定出力パスの run_id（ファイル名 suffix）")

    p_info = sub.add_parser("info", help="軌道とシーン設定の概要を表示する")
    _add_common(p_info)

    args = p.parse_args(argv)
    if args.cmd == "export" and args.frames is not None and int(args.frames) <= 0:
        p.error("--frames は 1 以上で指定してください")
    return args


def _load_scene(args: argparse.Namespace) -> Scene:
    if args.config is not None:
        set_config_path(args.config)
    return build_scene(runtime_config())


def _cmd_info(scene: Scene) -> int:
    trajectory = scene.trajectory
    print(f"script steps : {scene.script_length}")
    print(f"frames       : {len(trajectory)}")
    print(f"faces/frame  : {len(trajectory[0])}")
    print(f"ghost times  : {list(scene.initial_times)}")
    print(f"palette size : {len(scene.palette)}")
    print(f"canvas       : {scene.canvas_size[0]}x{scene.canvas_size[1]}")
    print(f"fps          : {scene.fps:g}")
    return 0


def _n_frames_for_loop(scene: Scene) -> int:
    # time_step 刻みで末尾まで進み、0 に戻るまでの tick 数。
    last = len(scene.trajectory) - 1
    return last // scene.time_step + (1 if last % scene.time_step else 0) + 1


def _cmd_export(scene: Scene, args: argparse.Namespace) -> int:
    from tumbler.core.animation import Animation
    from tumbler.core.output_paths import frame_output_paths, output_path
    from tumbler.export.image import export_gif, export_png_frames, render_frames
    from tumbler.export.svg import SvgSurface, export_svg

    n_frames = _n_frames_for_loop(scene) if args.frames is None else int(args.frames)
    canvas_size = scene.canvas_size

    frames = render_frames(scene, n_frames)

    if not args.no_png:
        base_path = output_path(kind="png", ext="png", run_id=args.run_id, canvas_size=canvas_size)
        if args.out_dir is not None:
            base_path = Path(str(args.out_dir)) / base_path.name
        paths = frame_output_paths(base_path, n_frames=n_frames)
        export_png_frames(frames, paths)
        print(f"Saved PNG: {paths[0].parent} ({len(paths)} frames)")

    if args.gif is not None:
        gif_path = export_gif(frames, Path(str(args.gif)), fps=scene.fps)
        print(f"Saved GIF: {gif_path}")

    if args.svg:
        base_svg = output_path(kind="svg", ext="svg", run_id=args.run_id, canvas_size=canvas_size)
        svg_paths = frame_output_paths(base_svg, n_frames=n_frames)
        surface = SvgSurface(canvas_size, background=scene.background)
        animation = Animation(scene, surface)
        for path in svg_paths:
            animation.tick()
            export_svg(surface, path)
        print(f"Saved SVG: {svg_paths[0].parent} ({len(svg_paths)} frames)")

    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    scene = _load_scene(args)

    if args.cmd == "info":
        return _cmd_info(scene)

    if args.cmd == "export":
        return _cmd_export(scene, args)

    if args.cmd == "run":
        from tumbler.interactive.window import run_window

        run_window(scene)
        return 0

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())
