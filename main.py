"""
PLY点云加载器 - 主程序
PLY Point Cloud Loader
"""

import sys
import os
import argparse
import asyncio
import logging

# 添加项目路径
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from config import Config
from core import PlyLoader, PlyLoadError, PointCloud, get_version_info
from utils.logging_config import setup_logging
from utils.point_cloud import PointCloudProcessor


def print_point_cloud_info(point_cloud: PointCloud, processor: PointCloudProcessor):
    """打印点云统计信息"""
    metrics = processor.compute_point_cloud_metrics(point_cloud)

    print(f"\n点云信息:")
    print(f"  点数: {metrics['num_points']}")
    if metrics['num_points'] == 0:
        return

    center = metrics['bbox_center']
    dimensions = metrics['dimensions']
    min_bound, max_bound = metrics['bbox']
    print(f"  包围盒中心: [{center[0]:.4f}, {center[1]:.4f}, {center[2]:.4f}]")
    print(f"  尺寸: [{dimensions[0]:.4f}, {dimensions[1]:.4f}, {dimensions[2]:.4f}]")
    print(f"  范围X: [{min_bound[0]:.4f}, {max_bound[0]:.4f}]")
    print(f"  范围Y: [{min_bound[1]:.4f}, {max_bound[1]:.4f}]")
    print(f"  范围Z: [{min_bound[2]:.4f}, {max_bound[2]:.4f}]")
    print(f"  距首点最远: {metrics['max_distance']:.4f}")
    if 'avg_point_spacing' in metrics:
        print(f"  平均点距: {metrics['avg_point_spacing']:.6f}")

    color_mean = metrics['color_mean']
    print(f"  颜色均值: [{color_mean[0]:.3f}, {color_mean[1]:.3f}, "
          f"{color_mean[2]:.3f}, {color_mean[3]:.3f}]")
    if not metrics['has_color']:
        print("  ⚠️  未声明颜色属性（颜色全为0）")


def main(argv=None):
    """主函数"""
    parser = argparse.ArgumentParser(
        description='PLY点云加载器',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  python main.py scan.ply
  python main.py scan.ply --export output/centered.ply
  python main.py scan.ply --view
  python main.py --config
        """
    )

    parser.add_argument('file', nargs='?',
                        help='点云文件路径 (.ply)')
    parser.add_argument('--export', '-e', default=None,
                        help='将处理后的点云保存为二进制PLY')
    parser.add_argument('--view', action='store_true',
                        help='使用Open3D显示点云')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='输出调试日志')
    parser.add_argument('--log-file', default=Config.LOG_FILE,
                        help='日志文件路径')
    parser.add_argument('--config', action='store_true',
                        help='显示当前配置并退出')
    parser.add_argument('--version', action='store_true',
                        help='显示版本信息并退出')

    args = parser.parse_args(argv)

    if args.config:
        Config.print_config()
        return 0

    if args.version:
        info = get_version_info()
        print(f"ply_loader {info['version']} - {info['format']}")
        return 0

    if not args.file:
        print("❌ 请指定点云文件")
        parser.print_help()
        return 1

    level = logging.DEBUG if args.verbose else Config.LOG_LEVEL
    logger = setup_logging(level=level, log_file=args.log_file)

    loader = PlyLoader(logger=logger)
    try:
        point_cloud = asyncio.run(loader.load_file(args.file))
    except (PlyLoadError, OSError) as e:
        print(f"❌ 加载点云失败: {e}")
        return 1

    if point_cloud.vertex_count == 0 and not args.file.endswith(Config.PLY_EXTENSION):
        print(f"❌ 不支持的文件格式，需要 {Config.PLY_EXTENSION}")
        return 1

    print(f"✓ 点云加载成功: {args.file}")

    processor = PointCloudProcessor()
    print_point_cloud_info(point_cloud, processor)

    if args.export:
        colors = point_cloud.colors
        # 已归一化的颜色还原到0-255
        colors_u8 = (colors * Config.COLOR_SCALE).round()
        saved = processor.save_ply(point_cloud.positions, args.export, colors_u8)
        print(f"\n✓ 点云已导出: {saved}")

    if args.view:
        if not processor.visualize(point_cloud,
                                   window_name=f"点云可视化 - {os.path.basename(args.file)}"):
            print("\n❌ 可视化失败")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
